"""Exception hierarchy for AI vs AI."""

from enum import Enum
from pathlib import Path


class AiVsAiError(Exception):
    """Base exception for all AI vs AI errors."""

    exit_code = 1

    def __init__(self, message: str, exit_code: int | None = None, hint: str | None = None):
        """
        Initialize exception with optional exit code and hint.

        Args:
            message: Error message
            exit_code: Override default exit code
            hint: Helpful hint for resolving the error (stored in __notes__)
        """
        super().__init__(message)
        if exit_code:
            self.exit_code = exit_code
        if hint:
            self.add_note(hint)


class ConfigErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    UNKNOWN_PROVIDER = "unknown_provider"
    INVALID_SETTINGS = "invalid_settings"


class ConfigError(AiVsAiError):
    """Configuration-related errors (config.yaml, credential store, missing keys)."""

    exit_code = 78

    def __init__(
        self,
        message: str,
        kind: ConfigErrorKind = ConfigErrorKind.INVALID_SETTINGS,
        provider: str | None = None,
        hint: str | None = None,
    ):
        super().__init__(message, hint=hint)
        self.kind = kind
        self.provider = provider


class ResourceError(AiVsAiError):
    """External resources unavailable (API, network, files)."""

    exit_code = 75


class ApiErrorKind(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_CHOICES = "empty_choices"


class ProviderError(ResourceError):
    """A single chat-completion exchange failed.

    ``status_code`` and ``body`` are only set for ``HTTP_STATUS`` errors; the
    body is the provider's response text, unmodified.
    """

    def __init__(
        self,
        provider: str,
        kind: ApiErrorKind,
        detail: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        if kind is ApiErrorKind.HTTP_STATUS:
            message = f"API Error from {provider} (HTTP {status_code}): {body}"
        else:
            message = f"{detail} ({provider})"
        super().__init__(message)
        self.provider = provider
        self.kind = kind
        self.status_code = status_code
        self.body = body


class FileAccessError(ResourceError):
    """File system access errors."""

    exit_code = 66

    def __init__(self, message: str, path: Path | str | None = None, hint: str | None = None):
        super().__init__(message, hint=hint)
        self.path = Path(path) if path is not None else None


class EmptySessionError(AiVsAiError):
    """Raised when exporting a session that has no recorded turns."""

    def __init__(self):
        super().__init__("Nothing to save yet", hint="Ask a question first, then /save")
