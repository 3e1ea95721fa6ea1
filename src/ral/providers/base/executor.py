"""
Process Executor

Runs an external program once, feeding it input and capturing its output.
External providers call this once per logical action.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

from ral.domain import Ok, Result, error

logger = logging.getLogger(__name__)


class ExecutionOption(StrEnum):
    """Flags controlling how a process is run"""

    TRIM_OUTPUT = "trim_output"
    MERGE_ENVIRONMENT = "merge_environment"


DEFAULT_OPTIONS = frozenset({ExecutionOption.TRIM_OUTPUT, ExecutionOption.MERGE_ENVIRONMENT})


class ExecutionConfig(BaseModel):
    """Configuration for running external providers

    Attributes:
        timeout_seconds: Per-invocation timeout; 0 disables the timeout
        noop: Ask providers to report changes without applying them
    """

    timeout_seconds: float = Field(default=0, ge=0, description="Invocation timeout in seconds")
    noop: bool = Field(default=False, description="Report changes without applying them")


class ExecutionOutcome(BaseModel):
    """What a finished process produced"""

    success: bool
    exit_code: int
    output: str = ""
    error: str = ""


class ProcessExecutor:
    """Synchronous subprocess runner

    Each call blocks until the child exits. When a timeout fires the child is
    killed before ``execute`` returns, so no process outlives the call.
    """

    def execute(
        self,
        path: str | Path,
        args: list[str] | None = None,
        stdin: str = "",
        timeout: float = 0,
        options: frozenset[ExecutionOption] = DEFAULT_OPTIONS,
        environment: dict[str, str] | None = None,
    ) -> Result[ExecutionOutcome]:
        """Run ``path`` with ``args`` and capture its streams.

        Args:
            path: Executable to run
            args: Extra command line arguments
            stdin: Text fed to the program's standard input
            timeout: Seconds before the program is killed; 0 means no timeout
            options: Output trimming and environment merging flags
            environment: Variables set for the child (merged over the parent's
                environment when MERGE_ENVIRONMENT is set)

        Returns:
            Ok(ExecutionOutcome) once the program has exited, or Err if it
            could not be started or ran past its timeout
        """
        command = [str(path), *(args or [])]
        env = dict(os.environ) if ExecutionOption.MERGE_ENVIRONMENT in options else {}
        env.update(environment or {})

        logger.debug("Executing %s", " ".join(command))
        try:
            # Own session so a timeout can kill the program's children too
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=env,
                start_new_session=True,
            )
        except OSError as e:
            return error(f"failed to execute {path}: {e}")

        try:
            output, stderr = process.communicate(stdin, timeout=timeout or None)
        except subprocess.TimeoutExpired:
            _kill_process_group(process)
            process.communicate()
            return error(f"{path} timed out after {timeout}s")

        output = output or ""
        stderr = stderr or ""
        if ExecutionOption.TRIM_OUTPUT in options:
            output = output.strip()
            stderr = stderr.strip()

        return Ok(
            ExecutionOutcome(
                success=process.returncode == 0,
                exit_code=process.returncode,
                output=output,
                error=stderr,
            )
        )


def _kill_process_group(process: subprocess.Popen) -> None:
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        # Group already gone
        logger.debug("process group %s exited before kill", process.pid)
