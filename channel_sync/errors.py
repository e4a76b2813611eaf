"""Exception types raised by the channel synchronizer."""

from typing import Optional, Sequence


class ConfigError(ValueError):
    """Raised when the configuration file is missing or malformed."""


class ToolInvocationError(RuntimeError):
    """Raised when the external tool exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        exit_code: Optional[int] = None,
        command: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.command = list(command) if command else []


class ToolNotFoundError(ToolInvocationError):
    """Raised when the external tool cannot be started at all."""

    EXIT_CODE = 127

    def __init__(self, executable: str, command: Optional[Sequence[str]] = None) -> None:
        super().__init__(
            f"Executable not found: {executable}",
            exit_code=self.EXIT_CODE,
            command=command,
        )
        self.executable = executable
