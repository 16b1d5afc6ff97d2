"""Custom exception hierarchy for the augmentation engine.

Every error carries a short, human-readable ``reason`` suitable for UI
display and a stable ``kind`` string used in results and logs.
"""


class AugmentEngineError(Exception):
    """Base exception for all augmentation engine errors."""

    kind = "error"
    default_reason = "Something went wrong"

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class NetworkUnavailable(AugmentEngineError):
    kind = "network_unavailable"
    default_reason = "No internet connection"


class RateLimited(AugmentEngineError):
    kind = "rate_limited"
    default_reason = "Please wait before searching again"


class QuotaExceeded(AugmentEngineError):
    kind = "quota_exceeded"
    default_reason = "Monthly search limit reached"


class SensitiveContent(AugmentEngineError):
    kind = "sensitive_content"
    default_reason = "Query contains personal information"


class NoResults(AugmentEngineError):
    kind = "no_results"
    default_reason = "No relevant results found"


class InvalidAPIKey(AugmentEngineError):
    kind = "invalid_api_key"
    default_reason = "Invalid API key"


class APIKeyMissing(AugmentEngineError):
    kind = "api_key_missing"
    default_reason = "API key not configured"


class ProviderError(AugmentEngineError):
    """A provider failed for a reason described by ``detail``."""

    kind = "provider_error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Provider error: {detail}")


class ParseError(AugmentEngineError):
    """A provider response could not be decoded."""

    kind = "parse_error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Failed to parse response: {detail}")


class LocationNotFound(AugmentEngineError):
    kind = "location_not_found"
    default_reason = "Location not found"


class PermissionDenied(AugmentEngineError):
    kind = "permission_denied"
    default_reason = "Access was not granted"


class LeagueNotDetected(AugmentEngineError):
    kind = "league_not_detected"
    default_reason = "Could not detect which league you're asking about"


class NoDataAvailable(AugmentEngineError):
    kind = "no_data_available"
    default_reason = "No data available"
