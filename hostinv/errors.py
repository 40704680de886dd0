"""Errors raised while enumerating host field values."""


class InputValidationError(ValueError):
    """Raised when a limit or offset argument is out of bounds.

    Raised before any query reaches the backend.
    """

    def __init__(self, parameter: str, value: int, message: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"invalid {parameter} parameter: {value} ({message})")


class BackendExecutionError(Exception):
    """Raised when the search backend returns a response without the expected shape.

    Transport and server errors from opensearchpy are not wrapped; they
    propagate as-is and belong to the same category.
    """

    def __init__(self, correlation_token: str, message: str):
        self.correlation_token = correlation_token
        super().__init__(f"{correlation_token}: {message}")


class UnknownFieldError(LookupError):
    """Raised when a request names a field that cannot be enumerated."""

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(f"Unknown system profile field(s): {', '.join(sorted(names))}")
