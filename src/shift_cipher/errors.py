class CipherError(RuntimeError):
    """Base class for failures reported by the shift cipher tools."""


class ConfigurationError(CipherError, ValueError):
    """Raised when a shift amount or another setting cannot be used."""


class ResourceError(CipherError, OSError):
    """Raised when the input file is missing or the output cannot be written."""

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = self.args[0] if self.args else ""
        if self.path is not None:
            return f"{message}: {self.path}"
        return message
