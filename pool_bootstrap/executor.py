from __future__ import annotations

import datetime
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ExecutionError, ParseError
from .logging_utils import get_logger, log_section
from .output_parser import extract_payload


class ProcessRunner:
    """Run CLI commands one at a time and recover their JSON payloads."""

    def __init__(
        self,
        cwd: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.cwd = cwd
        self.env = env
        self.logger = logger or get_logger()

    def execute_raw(self, command: str) -> subprocess.CompletedProcess:
        log = self.logger
        log.info("-" * 80)
        log.info(f"Timestamp: {datetime.datetime.now(datetime.timezone.utc).isoformat()}")
        if self.cwd is not None:
            log.info(f"Working directory: {self.cwd}")
        log.info(f"Running: {command}")

        try:
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
                env=self.env,
                cwd=str(self.cwd) if self.cwd is not None else None,
                check=False,
            )
        except OSError as exc:
            log.error(f"Could not start: {command} ({exc})")
            raise ExecutionError(command, -1, "", str(exc)) from exc

        stdout = result.stdout or ""
        stderr = result.stderr or ""
        log.info(f"Exit code: {result.returncode}")
        log_section(log, "STDOUT:", stdout if stdout else "<empty>", level=logging.DEBUG)
        log_section(log, "STDERR:", stderr if stderr else "<empty>", level=logging.DEBUG)
        return result

    def execute(self, command: str) -> Any:
        result = self.execute_raw(command)
        stdout = result.stdout or ""
        stderr = result.stderr or ""

        if result.returncode != 0:
            self.logger.error(f"Command failed: {command}")
            raise ExecutionError(command, result.returncode, stdout, stderr)

        try:
            return extract_payload(stdout)
        except ParseError:
            self.logger.error(f"No JSON payload in output of: {command}")
            raise
