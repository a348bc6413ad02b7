import json
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass
class Response:
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    def json(self, payload: Any) -> "Response":
        """Copy of this response carrying ``payload`` as a JSON body."""
        return replace(
            self,
            headers={**self.headers, "content-type": "application/json"},
            body=json.dumps(payload).encode(),
        )


def response(status_code: int = 200, headers: dict[str, str] | None = None) -> Response:
    return Response(status=status_code, headers=dict(headers or {}))


def error_response(status_code: int, message: str, code: str | None = None) -> Response:
    """JSON error body: ``{"error": message}`` plus ``code`` when given."""
    payload: dict[str, Any] = {"error": message}
    if code is not None:
        payload["code"] = code
    return response(status_code).json(payload)
