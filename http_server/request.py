import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Request:
    method: str
    path: str
    headers: dict[str, str]
    query_params: dict[str, list]
    body: bytes
    version: str
    _json: Any = field(init=False, repr=False, default=None)
    _json_valid: bool = field(init=False, repr=False, default=False)

    def __post_init__(self):
        if not self.body:
            return
        try:
            self._json = json.loads(self.body)
            self._json_valid = True
        except (json.JSONDecodeError, UnicodeDecodeError):
            self._json = None

    @property
    def json(self) -> Any:
        """Parsed JSON body, or None if the body is empty or malformed."""
        return self._json

    def has_json_object(self) -> bool:
        return self._json_valid and isinstance(self._json, dict)

    def get(self, field: str, default: Any = None) -> Any:
        if not field:
            raise ValueError("Field cannot be empty")

        if field in self.query_params and self.query_params[field]:
            return self.query_params[field][0]

        if self.has_json_object() and field in self._json:
            return self._json[field]

        return default
