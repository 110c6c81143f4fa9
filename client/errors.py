"""Structured exceptions raised by the client core."""

from typing import Any, Optional


class ViewerError(Exception):
    """Base class for client-side exceptions."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.__class__.__name__, "message": str(self)}


class MalformedMessageError(ViewerError):
    """Raised when an inbound payload is not one of the recognized message kinds."""

    def __init__(self, reason: str, payload: Any = None):
        self.reason = reason
        self.payload = payload
        super().__init__(f"Malformed message: {reason}")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason
        return data


class ActionRejectedError(ViewerError):
    """Raised when a user action fails a local precondition and is not sent."""

    def __init__(self, action: str, reason: str):
        self.action = action
        self.reason = reason
        super().__init__(reason)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["action"] = self.action
        return data


def describe_payload(payload: Any, limit: int = 120) -> Optional[str]:
    """Short printable form of a rejected payload for diagnostics."""
    if payload is None:
        return None
    text = repr(payload)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text
