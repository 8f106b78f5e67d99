"""Error taxonomy surfaced by the recommendation service."""


class FeastFitError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    public_message = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(FeastFitError):
    """Required request fields are missing or invalid."""

    status_code = 400
    public_message = "Missing required fields"


class RateLimitError(FeastFitError):
    """The client exceeded its request window."""

    status_code = 429
    public_message = "Rate limit exceeded. Please try again in a moment."


class ConfigurationError(FeastFitError):
    """A required credential or secret is not configured."""

    status_code = 500


class UpstreamError(FeastFitError):
    """The business-search provider failed or returned a non-success status."""

    status_code = 502
    public_message = "Yelp AI API error"


class PersistenceError(FeastFitError):
    """The meal log store rejected a read or write."""

    status_code = 500
    public_message = "Failed to log meal"
