"""Domain errors raised by the service layer.

Routes translate these into HTTP responses; services never raise HTTPException.
"""


class CodeBrosError(Exception):
    """Base class for recoverable domain errors."""


class NotFoundError(CodeBrosError):
    pass


class DuplicateConnectionError(CodeBrosError):
    def __init__(self, message: str = "Connection already exists"):
        super().__init__(message)


class InvalidStateError(CodeBrosError):
    pass


class ValidationError(CodeBrosError):
    pass
