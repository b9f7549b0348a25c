from enum import Enum
from typing import Optional
from dataclasses import dataclass

import httpx

from lengthen_cli.errors import ApplicationError, TransportError

DEFAULT_URL = "http://localhost:8080"


# ========== Config & Models ==========
@dataclass
class Config:
    url: str = DEFAULT_URL
    timeout: Optional[float] = None
    verify_tls: bool = True
    debug: bool = False

    @classmethod
    def init_form_args(cls, args) -> "Config":
        return cls(
            url=args.url or DEFAULT_URL,
            timeout=args.timeout,
            verify_tls=not args.insecure,
            debug=bool(args.debug),
        )

    @property
    def origin(self) -> str:
        """scheme://host[:port] of the service, without path or query."""
        u = httpx.URL(self.url)
        if not u.scheme or not u.host:
            raise ValueError(f"Not an absolute URL: {self.url!r}")
        # netloc keeps the brackets of an IPv6 literal, host does not.
        return f"{u.scheme}://{u.netloc.decode('ascii')}"


@dataclass(frozen=True)
class SubmissionParams:
    url: str
    delay: str = ""
    duration: str = ""


class ResultKind(str, Enum):
    SUCCESS = "success"
    APPLICATION_ERROR = "application_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class SubmitResult:
    kind: ResultKind
    body: str = ""
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, body: str) -> "SubmitResult":
        return cls(ResultKind.SUCCESS, body=body, status_code=200)

    @classmethod
    def application_error(cls, status_code: int) -> "SubmitResult":
        return cls(ResultKind.APPLICATION_ERROR, status_code=status_code)

    @classmethod
    def transport_error(cls, error: Optional[str] = None) -> "SubmitResult":
        return cls(ResultKind.TRANSPORT_ERROR, error=error)

    def unwrap(self) -> str:
        """Return the short code, or raise the error this result stands for."""
        if self.kind is ResultKind.SUCCESS:
            return self.body
        if self.kind is ResultKind.APPLICATION_ERROR:
            raise ApplicationError(self.status_code)
        raise TransportError(self.error)
