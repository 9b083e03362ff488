"""Error taxonomy shared by the API apps.

Every error carries a stable machine-readable ``code``, a human-readable
``message`` and the HTTP ``status`` the boundary should answer with.
"""


class PortfolioError(Exception):
    """Base class for client-visible API errors."""

    code = "error"
    message = "Something went wrong"
    status = 400

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def as_dict(self) -> dict:
        return {"success": False, "message": self.message, "code": self.code}


# ── Validation ──────────────────────────────────────────────────────────────


class ContactValidationError(PortfolioError):
    """Submitted contact fields failed validation."""

    code = "validation_error"
    status = 400


class MissingField(ContactValidationError):
    code = "missing_field"
    message = "All fields are required"


class NameTooLong(ContactValidationError):
    code = "name_too_long"
    message = "Name must be less than 100 characters"


class MessageTooLong(ContactValidationError):
    code = "message_too_long"
    message = "Message must be less than 1000 characters"


class InvalidEmail(ContactValidationError):
    code = "invalid_email"
    message = "Please enter a valid email address"


# ── Throttling ──────────────────────────────────────────────────────────────


class RateLimited(PortfolioError):
    code = "rate_limited"
    message = "Too many requests, please try again later."
    status = 429

    def __init__(self, message: str | None = None, *, retry_after: int = 0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


# ── Authentication ──────────────────────────────────────────────────────────


class AuthError(PortfolioError):
    """Admin authentication or authorization failed."""

    code = "auth_error"
    status = 401


class InvalidCredentials(AuthError):
    code = "invalid_credentials"
    message = "Invalid credentials"


class MissingToken(AuthError):
    code = "missing_token"
    message = "No token provided"


class InvalidToken(AuthError):
    code = "invalid_token"
    message = "Invalid or expired token"


class Forbidden(AuthError):
    code = "forbidden"
    message = "Access denied"
    status = 403


# ── Catch-all ───────────────────────────────────────────────────────────────


class ServerError(PortfolioError):
    code = "server_error"
    message = "Server error. Please try again later."
    status = 500
