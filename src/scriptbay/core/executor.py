"""Script process execution abstraction.

This module runs a single script file through the configured interpreter and
captures its output. Failures never escape as exceptions: they are folded into
an ExecutionResult with exit code -1 so that a batch can always carry on.
"""

import subprocess
import sys
import threading
import traceback
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from scriptbay.core.audit_log import AuditLog

STDERR_SEPARATOR = "--- STDERR ---"
FAILED_EXIT_CODE = -1

WINDOWS_INTERPRETER = ("powershell.exe", "-NoProfile", "-ExecutionPolicy", "Bypass", "-File")
POSIX_INTERPRETER = ("pwsh", "-NoProfile", "-ExecutionPolicy", "Bypass", "-File")


def default_interpreter() -> tuple[str, ...]:
    """Interpreter argv prefix for the current platform."""
    if sys.platform == "win32":
        return WINDOWS_INTERPRETER
    return POSIX_INTERPRETER


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one script run.

    Attributes:
        exit_code: Child exit code, or -1 if the script never ran to completion
        combined_output: stdout, followed by a stderr section when stderr has
            non-whitespace content
    """

    exit_code: int
    combined_output: str

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def combine_output(stdout: str, stderr: str) -> str:
    """Join captured streams for display.

    A stderr stream holding only whitespace counts as no error output.

    Example:
        >>> combine_output("ok", "boom")
        'ok\\n--- STDERR ---\\nboom\\n'
    """
    parts = [stdout, "\n"]
    if stderr.strip():
        parts.append(f"{STDERR_SEPARATOR}\n{stderr}\n")
    return "".join(parts)


def drain_streams(streams: Sequence[IO[str]]) -> list[str]:
    """Read every stream to EOF concurrently and return their contents in order.

    Each stream gets its own reader thread; all are joined before returning.
    Reading one pipe after the other can deadlock once the child fills the OS
    buffer of the pipe that is not being read.

    Raises:
        Exception: The first error raised by a reader, after all readers joined
    """
    contents = ["" for _ in streams]
    errors: list[BaseException | None] = [None for _ in streams]

    def read_all(index: int, stream: IO[str]) -> None:
        try:
            contents[index] = stream.read()
        except Exception as e:
            errors[index] = e

    readers = [
        threading.Thread(target=read_all, args=(index, stream), daemon=True)
        for index, stream in enumerate(streams)
    ]
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()
    for error in errors:
        if error is not None:
            raise error
    return contents


class ScriptExecutor(ABC):
    """Abstract interface for running one script file.

    This abstraction enables testing batch logic without spawning processes by
    making execution an injectable dependency.
    """

    @abstractmethod
    def run(self, script_path: Path) -> ExecutionResult:
        """Run script_path to completion and return its result.

        Blocks the calling thread until the child has exited and both output
        streams are fully drained. Never raises for script or spawn failures.
        """
        ...


class RealScriptExecutor(ScriptExecutor):
    """Production implementation spawning the interpreter via subprocess."""

    def __init__(self, audit_log: AuditLog, interpreter: Sequence[str]) -> None:
        """Create an executor.

        Args:
            audit_log: Sink for spawn and I/O errors
            interpreter: argv prefix placed before the script path, for example
                ("pwsh", "-NoProfile", "-ExecutionPolicy", "Bypass", "-File")
        """
        self._audit_log = audit_log
        self._interpreter = tuple(interpreter)

    @property
    def interpreter(self) -> tuple[str, ...]:
        return self._interpreter

    def build_command(self, script_path: Path) -> list[str]:
        return [*self._interpreter, str(script_path)]

    def run(self, script_path: Path) -> ExecutionResult:
        if not script_path.is_file():
            return ExecutionResult(
                exit_code=FAILED_EXIT_CODE, combined_output=f"Script not found: {script_path}"
            )

        cmd = self.build_command(script_path)
        try:
            process = subprocess.Popen(
                cmd,
                cwd=script_path.parent,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                creationflags=getattr(subprocess, "CREATE_NO_WINDOW", 0),
            )
            with process:
                stdout, stderr = drain_streams([process.stdout, process.stderr])
                returncode = process.wait()
            return ExecutionResult(
                exit_code=returncode, combined_output=combine_output(stdout, stderr)
            )
        except Exception as e:
            cmd_str = " ".join(cmd)
            self._audit_log.log(
                f"Script execution error: {script_path}\nCommand: {cmd_str}\n"
                f"{traceback.format_exc().rstrip()}"
            )
            return ExecutionResult(
                exit_code=FAILED_EXIT_CODE, combined_output=f"Execution error: {e}"
            )
