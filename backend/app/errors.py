from enum import Enum


class ErrorType(Enum):
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    PERSISTENCE_ERROR = "persistence_error"
    INTERNAL_ERROR = "internal_error"


# Map error types to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorType.VALIDATION_ERROR: 400,
    ErrorType.NOT_FOUND: 404,
    ErrorType.PERSISTENCE_ERROR: 500,
    ErrorType.INTERNAL_ERROR: 500,
}
