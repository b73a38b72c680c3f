from enum import Enum


class ErrorKind(str, Enum):
    """Outcome categories reported by the link directory and its callers"""
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    CODE_TAKEN = "code_taken"
    NOT_FOUND = "not_found"
    GENERATION_EXHAUSTED = "generation_exhausted"
    STORAGE_FAILURE = "storage_failure"


class LinkError(Exception):
    """Base class for every error raised by the directory, service and resolver"""
    kind: ErrorKind
    message = "Link operation failed"

    def __init__(self, message: str = None, code: str = None):
        self.message = message or self.message
        self.code = code
        super().__init__(self.message)


class InvalidInput(LinkError):
    """Malformed URL or short code; the caller must fix the request"""
    kind = ErrorKind.INVALID_INPUT
    message = "Invalid input"


class CodeConflict(LinkError):
    """The directory already holds a record for this short code"""
    kind = ErrorKind.CONFLICT
    message = "Short code already exists"


class CodeTaken(LinkError):
    """A short code explicitly requested by the caller is already in use"""
    kind = ErrorKind.CODE_TAKEN
    message = "Short code already exists"


class LinkNotFound(LinkError):
    kind = ErrorKind.NOT_FOUND
    message = "Link not found"


class GenerationExhausted(LinkError):
    """Every generated candidate collided within the attempt bound"""
    kind = ErrorKind.GENERATION_EXHAUSTED
    message = "Could not allocate a unique short code"


class StorageFailure(LinkError):
    """The persistence layer failed or timed out"""
    kind = ErrorKind.STORAGE_FAILURE
    message = "Internal server error"
