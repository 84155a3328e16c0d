"""
Exceptions raised by the industry insight pipeline and the profile operations
built on it.
"""


class InsightError(Exception):
    """Base class for insight pipeline errors"""


class UpstreamUnavailable(InsightError):
    """The text generation service failed at the transport or service level."""


class MalformedPayload(InsightError):
    """Sanitized model output did not decode as JSON."""

    def __init__(self, message, raw_text=None):
        super().__init__(message)
        self.message = message
        self.raw_text = raw_text


class UniquenessViolation(InsightError):
    """Another caller already created the insight for this industry."""

    def __init__(self, industry):
        super().__init__(f"Industry insight already exists for '{industry}'")
        self.industry = industry


class Unauthorized(InsightError):
    """No valid caller identity on the request."""


class NotFound(InsightError):
    """The caller's identity has no backing profile."""


class ProfileUpdateFailed(InsightError):
    """Opaque failure surfaced to callers of the profile update."""

    def __init__(self):
        super().__init__("Failed to update profile")
