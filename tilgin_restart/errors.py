"""Exception hierarchy for the Tilgin restart tool."""

import enum


class RestarterError(Exception):
    """Base class for every error raised by tilgin_restart."""


class ConfigError(RestarterError):
    """A required configuration value is missing or invalid."""


class SessionInitError(RestarterError):
    """The HTTP session or its cookie jar could not be built."""


class FetchError(RestarterError):
    """A page could not be fetched from the router."""


class ExtractionKind(enum.Enum):
    SECRET_NOT_FOUND = "secret_not_found"
    TOKEN_NOT_FOUND = "token_not_found"


class ExtractionError(RestarterError):
    """An expected value was not found in a router page."""

    def __init__(self, kind: ExtractionKind, message: str | None = None) -> None:
        self.kind = kind
        super().__init__(message or kind.value.replace("_", " "))


class AuthError(RestarterError):
    """The login request failed or was rejected."""


class RestartError(RestarterError):
    """The restart request failed or was rejected."""


class LivenessTimeoutError(RestarterError):
    """The router was not seen going down and coming back up in time."""

    def __init__(self, timeout: float, drop_seen: bool) -> None:
        self.timeout = timeout
        self.drop_seen = drop_seen
        state = "came back up" if drop_seen else "went down"
        super().__init__(
            f"timed out after {timeout:g}s waiting for router: never {state}"
        )


class StepError(RestarterError):
    """
    Wraps the error raised by one step of the restart sequence.

    ``step`` names the failing step; ``cause`` is the original exception,
    whose type is left untouched so callers can still inspect its kind.
    """

    def __init__(self, step: str, cause: Exception) -> None:
        self.step = step
        self.cause = cause
        super().__init__(f"{step}: {cause}")
