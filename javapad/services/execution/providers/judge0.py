# -*- coding: utf-8 -*-
"""
Judge0 CE Execution Provider

API Docs: https://ce.judge0.com/
Endpoint: POST {base_url}/submissions?base64_encoded=false&wait=true

The call blocks until the submission has finished and returns stdout,
stderr, compile_output and a status such as "Accepted",
"Compilation Error", "Runtime Error (NZEC)" or "Time Limit Exceeded".
The RapidAPI-hosted instance additionally needs X-RapidAPI-Key/Host headers.
"""

from typing import Any
from urllib.parse import urlparse

from javapad.config.defaults import JUDGE0_JAVA_LANGUAGE_ID

from ..exceptions import MalformedResponseError
from ..registry import register_provider
from ..types import RawResult
from .base_provider import BaseExecutionProvider, _text


@register_provider("judge0")
class Judge0Provider(BaseExecutionProvider):
    """Synchronous Judge0 submission (wait=true)."""

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/submissions"

    @property
    def language_id(self) -> int:
        return self.settings.language_id or JUDGE0_JAVA_LANGUAGE_ID

    def request_params(self) -> dict[str, str]:
        return {"base64_encoded": "false", "wait": "true"}

    def request_headers(self) -> dict[str, str]:
        headers = super().request_headers()
        if self.api_key:
            headers["X-RapidAPI-Key"] = self.api_key
            headers["X-RapidAPI-Host"] = urlparse(self.base_url).hostname or ""
        return headers

    def build_payload(self, code: str, stdin: str) -> dict[str, Any]:
        return {
            "language_id": self.language_id,
            "source_code": code,
            "stdin": stdin,
        }

    def parse_response(self, data: dict[str, Any]) -> RawResult:
        status = data.get("status")
        if not isinstance(status, dict):
            # e.g. {"token": "..."} when the instance ignores wait=true,
            # or {"error": "..."} from the gateway
            raise MalformedResponseError(
                "Judge0 response has no status",
                provider=self.name,
                details={"keys": sorted(data)},
            )

        return RawResult(
            stdout=_text(data.get("stdout")),
            stderr=_text(data.get("stderr")),
            compile_output=_text(data.get("compile_output")),
            status=_text(status.get("description")) or None,
            provider=self.name,
            raw_response=data,
        )
