# Overview: Error taxonomy for registration-token redemption.

"""
Registration Errors

Every error carries a stable `code` (returned to API clients) and the HTTP
status used on the read path. The write path maps all client-correctable
errors to 400 (see routes/registration.py).

TERMINAL (user must request a new token):
- TokenNotFound, TokenExpired, TokenAlreadyUsed

RETRYABLE:
- StorageFailure: the transaction was rolled back; token state decides
  whether a resubmission can succeed

NOT RETRYABLE:
- PartialCommitFailure: rollback failed, manual inspection required
"""


class RegistrationError(Exception):
    code = "registration_error"
    http_status = 500
    default_message = "Registration failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class TokenError(RegistrationError):
    """Token cannot be redeemed."""


class TokenNotFound(TokenError):
    code = "not_found"
    http_status = 404
    default_message = "Invalid or expired registration token"


class TokenExpired(TokenError):
    code = "expired"
    http_status = 410
    default_message = "Registration link has expired"


class TokenAlreadyUsed(TokenError):
    code = "already_used"
    http_status = 409
    default_message = "Registration has already been completed"


class ApplicationNotFound(RegistrationError):
    code = "application_not_found"
    http_status = 404
    default_message = "Application not found"


class StorageFailure(RegistrationError):
    code = "storage_failure"
    http_status = 500
    default_message = "Failed to complete registration"


class PartialCommitFailure(RegistrationError):
    code = "partial_commit_failure"
    http_status = 500
    default_message = "Registration may be partially recorded; contact the organiser"
