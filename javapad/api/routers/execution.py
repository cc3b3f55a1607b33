from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from javapad.api.deps import get_session
from javapad.services.editor import EditorSession, RunInProgressError, RunReport
from javapad.services.execution import uses_stdin

router = APIRouter()


class RunRequest(BaseModel):
    code: str
    stdin: str = ""


class StdinHintRequest(BaseModel):
    code: str


class StdinHintResponse(BaseModel):
    uses_stdin: bool


@router.post("/run", response_model=RunReport)
async def run_code(request: RunRequest, session: EditorSession = Depends(get_session)):
    """Run Java code and return the classified result."""
    try:
        return await session.run(request.code, request.stdin)
    except RunInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/stdin-hint", response_model=StdinHintResponse)
async def stdin_hint(request: StdinHintRequest):
    """Whether the code appears to read standard input."""
    return StdinHintResponse(uses_stdin=uses_stdin(request.code))
