"""
Exception types.

Every error surfaced by the reward engine carries a kind and a message so
callers can act on it without inspecting the exception class.
"""


class RefnetError(Exception):
    """Base class for reward engine errors."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Error payload for the request layer."""
        return {"kind": self.kind, "message": self.message}


class ValidationError(RefnetError):
    """Raised on malformed input. Nothing has been written."""

    kind = "validation"


class NotFoundError(ValidationError):
    """Raised when a referenced user does not exist."""

    kind = "not_found"


class StorageError(RefnetError):
    """Raised when the ledger store fails during processing."""

    kind = "storage"
