from __future__ import annotations

from typing import Optional


class AgentError(RuntimeError):
    """Base class for expected provisioning failures."""


class CommandError(AgentError):
    def __init__(self, command: str, returncode: Optional[int], output: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        if returncode is None:
            msg = f"Command could not be started: {command}"
        else:
            msg = f"Command failed ({returncode}): {command}"
        if output.strip():
            msg = f"{msg}\n{output.strip()}"
        super().__init__(msg)


class ExtractionMiss(AgentError):
    """A value could not be extracted from command output."""


class InventoryError(AgentError):
    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class StepError(AgentError):
    pass


class ReadinessTimeout(AgentError):
    def __init__(self, host: str, attempts: int) -> None:
        self.host = host
        self.attempts = attempts
        super().__init__(f"ping timeout: {host} unreachable after {attempts} attempts")
