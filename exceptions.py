"""
Exception classes for the compression service.

Every error carries the HTTP status it maps to, so the Flask error handler
can turn any of them into a ``{"message": ...}`` response.
"""


class CompressorError(Exception):
    """Base exception for all service errors"""

    status_code = 500

    def __init__(self, message, status_code=None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ClientInputError(CompressorError):
    """Raised when the request itself is unusable"""

    status_code = 400


class MissingUploadError(ClientInputError):
    """Raised when the request carries no file"""

    def __init__(self, message='No PDF file uploaded.'):
        super().__init__(message)


class UnsupportedFileTypeError(ClientInputError):
    """Raised when the upload is neither named nor typed as a PDF"""

    def __init__(self, filename):
        self.filename = filename
        super().__init__('Only PDF files can be compressed.')


class UnknownCompressionLevel(ClientInputError):
    """Raised when a compression level is not in the profile table"""

    def __init__(self, level, choices):
        self.level = level
        self.choices = choices
        super().__init__(f"Invalid compression level. Choose from: {', '.join(choices)}.")


class ToolInvocationError(CompressorError):
    """Raised when Ghostscript fails to start, exits non-zero or times out"""

    def __init__(self, detail, returncode=None):
        self.detail = detail
        self.returncode = returncode
        super().__init__(f"Error compressing PDF. Ghostscript stderr: {detail}")
