"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any

from smartset.exceptions import SmartSetError


def _plain(data: Any) -> Any:
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    if isinstance(data, list | tuple):
        return [_plain(item) for item in data]
    if isinstance(data, dict):
        return {key: _plain(value) for key, value in data.items()}
    return data


class JsonFormatter:
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any) -> str:
        """Format data as JSON.

        Args:
            data: Pydantic model, dataclass, collection or primitive

        Returns:
            JSON string
        """
        plain = _plain(data)
        if isinstance(plain, dict | list):
            return json.dumps(plain, default=str, indent=2)
        return json.dumps({"value": plain}, default=str, indent=2)

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response."""
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = _plain(data)
        return json.dumps(response, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Args:
            error: Error message or exception
            code: Exit code

        Returns:
            JSON string
        """
        response: dict[str, Any] = {"success": False, "code": code}
        if isinstance(error, SmartSetError):
            response["error"] = error.message
            if error.hint:
                response["hint"] = error.hint
        else:
            response["error"] = str(error)
        return json.dumps(response, default=str, indent=2)
