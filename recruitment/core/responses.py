from typing import Any


def ok(data: Any = None, message: str | None = None) -> dict:
    """Success envelope shared by every route."""
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body
