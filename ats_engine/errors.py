from __future__ import annotations


class ATSEngineError(RuntimeError):
    """Base error for the scoring core. ``code`` and ``status_code`` are safe to show to users."""

    default_code = "ats_error"
    default_status_code = 500

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.code = code or self.default_code
        self.status_code = status_code or self.default_status_code

    def to_dict(self) -> dict[str, str]:
        return {"error": self.code, "message": str(self)}


class InputValidationError(ATSEngineError):
    default_code = "invalid_input"
    default_status_code = 400


class ExternalServiceError(ATSEngineError):
    default_code = "llm_unavailable"
    default_status_code = 503


class AuthError(ExternalServiceError):
    default_code = "llm_auth"


class RateLimitError(ExternalServiceError):
    default_code = "llm_rate_limited"
    default_status_code = 429


class ServerError(ExternalServiceError):
    default_code = "llm_server_error"


class EmptyResponseError(ExternalServiceError):
    default_code = "llm_empty_response"


class ParseError(ATSEngineError):
    default_code = "llm_invalid"
    default_status_code = 502
