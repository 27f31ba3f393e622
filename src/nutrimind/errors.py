"""Application error hierarchy."""


class NutriMindError(Exception):
    """Base class for application errors."""


class ConfigurationError(NutriMindError):
    """Required configuration is missing; retrying will not help."""


class ExtractionError(NutriMindError):
    """Free text could not be turned into nutrition entries."""


class MissingCredentialError(ExtractionError, ConfigurationError):
    """The extraction service has no API credential configured."""


class ServiceError(ExtractionError):
    """The extraction service failed; the submission may be retried."""


class MalformedResponseError(ExtractionError):
    """The extraction service replied with something we cannot parse."""

    def __init__(self, message: str, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class PersistenceError(NutriMindError):
    """A read or write against the data store failed."""


class AuthenticationError(NutriMindError):
    """Login or registration details were rejected."""
