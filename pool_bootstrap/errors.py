from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional


class BootstrapError(Exception):
    """Base class for every failure that aborts a bootstrap run."""


class ExecutionError(BootstrapError):
    """Raised when a CLI invocation cannot start or exits with a non-zero code."""

    def __init__(self, command: str, returncode: int, stdout: str, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = stderr.strip() or stdout.strip() or "<no output>"
        super().__init__(f"Command failed with exit code {returncode}: {command}\n{detail}")


class ParseError(BootstrapError):
    """Raised when no JSON payload can be recovered from CLI output."""

    def __init__(self, raw_output: str, reason: str = "no structured payload found") -> None:
        self.raw_output = raw_output
        self.reason = reason
        super().__init__(f"Could not parse CLI output ({reason}). Raw output:\n{raw_output}")


class OperationFailed(BootstrapError):
    """The CLI exited cleanly but reported a non-success status.

    Subclasses cover the orchestrator steps; for those ``reported_status`` is
    ``None`` when the operation succeeded but the expected object was missing.
    """

    def __init__(
        self,
        operation: str,
        reported_status: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.reported_status = reported_status
        if message is None:
            message = f"{operation} reported status {reported_status!r}"
        super().__init__(message)


class PublishError(OperationFailed):
    """Raised when publishing fails or yields no package id."""


class CapabilityNotFound(OperationFailed):
    """Raised when publishing did not create the mint capability."""


class MintError(OperationFailed):
    """Raised when minting fails or no minted coin is reported."""


class SplitError(OperationFailed):
    """Raised when splitting fails or no split coin is reported."""


class PoolCreationError(OperationFailed):
    """Raised when pool creation fails or no pool object is reported."""


class InsufficientFunds(BootstrapError):
    def __init__(self, have: int, need: int) -> None:
        self.have = have
        self.need = need
        super().__init__(f"Insufficient SUI balance. Have {have} MIST, need {need} MIST.")


class PropagationTimeout(BootstrapError):
    """Raised when a freshly published object never becomes readable."""

    def __init__(self, object_id: str, attempts: int) -> None:
        self.object_id = object_id
        self.attempts = attempts
        super().__init__(f"Object {object_id} not visible after {attempts} attempts")


class ConfigPatternNotFound(BootstrapError):
    def __init__(self, path: Path, names: Iterable[str]) -> None:
        self.path = path
        self.names = tuple(names)
        super().__init__(f"Assignments not found in {path}: {', '.join(self.names)}")


class StateAlreadySet(BootstrapError):
    """Raised when a bootstrap state field is written twice."""


class StateNotReady(BootstrapError):
    """Raised when a bootstrap state field is read before its step ran."""


class SettingsError(BootstrapError):
    """Raised when an environment setting cannot be interpreted."""


__all__ = [
    "BootstrapError",
    "ExecutionError",
    "ParseError",
    "OperationFailed",
    "PublishError",
    "CapabilityNotFound",
    "MintError",
    "SplitError",
    "PoolCreationError",
    "InsufficientFunds",
    "PropagationTimeout",
    "ConfigPatternNotFound",
    "StateAlreadySet",
    "StateNotReady",
    "SettingsError",
]
