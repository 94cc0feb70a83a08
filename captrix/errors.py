"""Error types and classification for transcript extraction."""

from dataclasses import dataclass
from enum import Enum, auto

from rich.console import Console
from rich.markup import escape


class ErrorCategory(Enum):
    """Categories for extraction errors to determine what the user is told."""

    INVALID_INPUT = auto()  # Not a video URL/ID, no network access attempted
    NETWORK_ERROR = auto()  # Transport failure or unexpected HTTP status
    BLOCKED = auto()  # Route refused the request (403/429/451)
    NO_CAPTIONS = auto()  # Page fetched but no caption tracks embedded
    NO_SUITABLE_TRACK = auto()  # Track list empty at selection time
    EXHAUSTED = auto()  # Every route failed
    UNKNOWN = auto()


# HTTP statuses that mean "the route works but we were turned away"
BLOCKED_STATUSES = frozenset({401, 403, 407, 429, 451})

DEMO_HINT = "Run 'captrix demo' for a sample transcript."


class CaptrixError(Exception):
    """Base class for all captrix errors."""

    category = ErrorCategory.UNKNOWN


class InvalidVideoIdError(CaptrixError, ValueError):
    """Raised when input does not contain a valid 11-character video ID."""

    category = ErrorCategory.INVALID_INPUT


class RouteFetchError(CaptrixError):
    """Raised when a routed fetch fails by transport error or non-2xx status."""

    category = ErrorCategory.NETWORK_ERROR

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    @property
    def is_blocked(self) -> bool:
        return self.status_code in BLOCKED_STATUSES


class NoCaptionsFoundError(CaptrixError):
    """Raised when a fetched page exposes no caption tracks."""

    category = ErrorCategory.NO_CAPTIONS


class NoSuitableTrackError(CaptrixError):
    """Raised when no caption track can be selected."""

    category = ErrorCategory.NO_SUITABLE_TRACK


class ExtractionFailedError(CaptrixError):
    """Raised when every route failed.

    Only the error from the last attempted route is kept as ``cause``; it is
    None when there were no routes to try.
    """

    category = ErrorCategory.EXHAUSTED

    DEFAULT_MESSAGE = (
        "Could not retrieve captions. The video might be private, have no captions, "
        "or the connection was blocked."
    )

    def __init__(self, cause: BaseException | None = None, attempts: int = 0):
        super().__init__(str(cause) if cause is not None and str(cause) else self.DEFAULT_MESSAGE)
        self.cause = cause
        self.attempts = attempts


@dataclass
class ErrorInfo:
    """Structured error with handling guidance."""

    category: ErrorCategory
    message: str
    user_action: str
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.category.name}: {self.message}"


def classify_error(exc: BaseException) -> ErrorInfo:
    """Classify an exception into an ErrorInfo with user guidance.

    Extraction failures are classified by their last cause, so the user can
    tell "no captions / blocked" apart from general network trouble.

    Args:
        exc: The exception to classify

    Returns:
        ErrorInfo with category, message, and suggested user action
    """
    if isinstance(exc, ExtractionFailedError):
        cause = exc.cause
        if cause is None:
            return ErrorInfo(
                category=ErrorCategory.EXHAUSTED,
                message=str(exc),
                user_action=f"Check the configured routes. {DEMO_HINT}",
            )
        inner = classify_error(cause)
        return ErrorInfo(
            category=inner.category,
            message=inner.message,
            user_action=f"{inner.user_action} {DEMO_HINT}",
            status_code=inner.status_code,
        )

    if isinstance(exc, InvalidVideoIdError):
        return ErrorInfo(
            category=ErrorCategory.INVALID_INPUT,
            message=str(exc),
            user_action="Invalid YouTube URL. Please double check the link.",
        )

    if isinstance(exc, RouteFetchError):
        if exc.is_blocked:
            return ErrorInfo(
                category=ErrorCategory.BLOCKED,
                message=f"Request blocked ({exc.status_code}): {exc}",
                user_action="The proxy or YouTube refused the request. Try again later.",
                status_code=exc.status_code,
            )
        return ErrorInfo(
            category=ErrorCategory.NETWORK_ERROR,
            message=f"Network error: {exc}",
            user_action="Check internet connection and proxy availability.",
            status_code=exc.status_code,
        )

    if isinstance(exc, NoCaptionsFoundError):
        return ErrorInfo(
            category=ErrorCategory.NO_CAPTIONS,
            message=str(exc),
            user_action="The video may be private, age-gated, or have captions disabled.",
        )

    if isinstance(exc, NoSuitableTrackError):
        return ErrorInfo(
            category=ErrorCategory.NO_SUITABLE_TRACK,
            message=str(exc),
            user_action="No caption track could be selected for this video.",
        )

    if isinstance(exc, (ConnectionError, TimeoutError, OSError)):
        return ErrorInfo(
            category=ErrorCategory.NETWORK_ERROR,
            message=f"Network error: {exc}",
            user_action="Check internet connection.",
        )

    return ErrorInfo(
        category=ErrorCategory.UNKNOWN,
        message=str(exc),
        user_action="Unexpected error. Run with --verbose for details.",
    )


def display_error(exc: BaseException, console: Console | None = None) -> ErrorInfo:
    """Print a classified error to the console and return its ErrorInfo."""
    console = console or Console(stderr=True)
    info = classify_error(exc)
    console.print(f"[red]Error:[/red] {escape(info.message)}")
    console.print(f"[dim]{escape(info.user_action)}[/dim]")
    return info
