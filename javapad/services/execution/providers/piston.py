# -*- coding: utf-8 -*-
"""
Piston Execution Provider

API Docs: https://github.com/engineer-man/piston
Endpoint: POST {base_url}/execute

Output is nested under a "run" stage (stdout/stderr) and an optional
"compile" stage (only its stderr is used). There is no status phrase, so
classification relies on the text rules.
"""

from typing import Any

from ..exceptions import MalformedResponseError
from ..registry import register_provider
from ..types import RawResult
from .base_provider import BaseExecutionProvider, _text


def _stage(data: dict[str, Any], key: str) -> dict[str, Any]:
    stage = data.get(key)
    return stage if isinstance(stage, dict) else {}


@register_provider("piston")
class PistonProvider(BaseExecutionProvider):
    """Piston v2 execute endpoint."""

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/execute"

    def build_payload(self, code: str, stdin: str) -> dict[str, Any]:
        return {
            "language": self.settings.language,
            "version": self.settings.version,
            "files": [{"name": self.settings.file_name, "content": code}],
            "stdin": stdin,
        }

    def parse_response(self, data: dict[str, Any]) -> RawResult:
        if not isinstance(data.get("run"), dict) and not isinstance(data.get("compile"), dict):
            raise MalformedResponseError(
                "Piston response has neither run nor compile stage",
                provider=self.name,
                details={"message": _text(data.get("message"))} if data.get("message") else None,
            )

        run = _stage(data, "run")
        return RawResult(
            stdout=_text(run.get("stdout")),
            stderr=_text(run.get("stderr")),
            compile_output=_text(_stage(data, "compile").get("stderr")),
            status=None,
            provider=self.name,
            raw_response=data,
        )
