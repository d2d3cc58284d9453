class LRUKitError(Exception):
    """Base class for all lrukit exceptions."""
    pass

class ConfigurationError(LRUKitError):
    """Raised when there is an error in the configuration."""
    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception
        self.message = message

    def __str__(self) -> str:
        if self.original_exception:
            return f"{self.message} (Original: {str(self.original_exception)})"
        return self.message

class ValidationError(LRUKitError, ValueError):
    """Raised when input validation fails."""
    pass

class InvalidArgumentError(ValidationError):
    """Raised when a constructor or decorator receives an unusable argument."""
    def __init__(self, message: str, argument: str = None, value: object = None):
        super().__init__(message)
        self.message = message
        self.argument = argument
        self.value = value

    def __str__(self) -> str:
        if self.argument is not None:
            return f"{self.message} (argument: {self.argument}={self.value!r})"
        return self.message
