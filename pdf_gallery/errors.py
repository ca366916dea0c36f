# pdf_gallery/errors.py
"""Domain errors raised by services and rendered by the app's exception handlers.

Every error carries the HTTP status it maps to and a stable code, so a
single handler in ``main.py`` can render all of them as
``{"detail": <message>, "code": <code>}``.
"""


class GalleryError(Exception):
    """Base class for all PDF gallery errors."""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Something went wrong!"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationRequiredError(GalleryError):
    """Raised when a request carries no usable bearer token."""

    status_code = 401
    code = "AUTHENTICATION_REQUIRED"
    default_message = "Authentication required"


class InvalidCredentialsError(GalleryError):
    """Raised when login credentials are invalid."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid username or password"


class UserAlreadyExistsError(GalleryError):
    """Raised when registering a username or email that is already taken."""

    status_code = 400
    code = "USER_ALREADY_EXISTS"
    default_message = "User already exists"


class IncorrectPasswordError(GalleryError):
    status_code = 400
    code = "INCORRECT_PASSWORD"
    default_message = "Current password is incorrect"


class NotFoundError(GalleryError):
    """Raised when a PDF does not exist or is not visible to the caller."""

    status_code = 404
    code = "NOT_FOUND"
    default_message = "PDF not found"


class ForbiddenError(GalleryError):
    """Raised when a visible PDF is modified by someone other than its owner."""

    status_code = 403
    code = "FORBIDDEN"
    default_message = "Access denied"


class InvalidFileError(GalleryError):
    status_code = 400
    code = "INVALID_FILE"
    default_message = "Please upload a PDF file"


class FileTooLargeError(GalleryError):
    status_code = 400
    code = "FILE_TOO_LARGE"
    default_message = "File exceeds the maximum upload size"


class FileMissingError(GalleryError):
    """Raised when a PDF record exists but its stored file is gone."""

    status_code = 404
    code = "FILE_MISSING"
    default_message = "PDF file not found on server"


class RecordValidationError(GalleryError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Validation Error"


class InvalidIdError(GalleryError):
    """Raised when a path id is not an integer."""

    status_code = 400
    code = "INVALID_ID"
    default_message = "Invalid ID format"
