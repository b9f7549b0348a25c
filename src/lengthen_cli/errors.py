from typing import Optional

# Statuses the lengthen service is known to answer with.
KNOWN_STATUSES = {
    400: "request rejected",
    404: "not found",
    429: "rate limited",
    500: "service error",
}


class LengthenError(Exception):
    """Base class for errors surfaced to the user."""


class ApplicationError(LengthenError):
    """The service answered, but not with 200."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(status_code)

    def __str__(self) -> str:
        return f"status code: {self.status_code}"

    @property
    def description(self) -> Optional[str]:
        return KNOWN_STATUSES.get(self.status_code)


class TransportError(LengthenError):
    """The request never completed at the network layer."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(reason)

    def __str__(self) -> str:
        return "network error"
