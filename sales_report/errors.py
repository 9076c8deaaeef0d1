from enum import Enum


class ErrorKind(str, Enum):
    INVALID_STRUCTURE = "InvalidStructure"
    EMPTY_INPUT = "EmptyInput"
    INVALID_OPTIONS = "InvalidOptions"
    MISSING_STRATEGY = "MissingStrategy"


class AnalysisError(ValueError):
    """Raised before aggregation starts when the inputs cannot be analysed."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidStructureError(AnalysisError):
    kind = ErrorKind.INVALID_STRUCTURE


class EmptyInputError(AnalysisError):
    kind = ErrorKind.EMPTY_INPUT


class InvalidOptionsError(AnalysisError):
    kind = ErrorKind.INVALID_OPTIONS


class MissingStrategyError(AnalysisError):
    kind = ErrorKind.MISSING_STRATEGY
