"""Process management for FFMPEG execution."""

import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional
from .command_builder import FFMPEGCommand
from ..sanitize import quote_command

logger = logging.getLogger("videotools")


@dataclass
class ProcessResult:
    """Result of an FFMPEG process execution."""
    success: bool
    return_code: int
    stdout: str
    stderr: str
    command: str
    output_path: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def diagnostics(self) -> str:
        """Captured engine output, stderr first (ffmpeg logs there)."""
        return "\n".join(part for part in (self.stderr, self.stdout) if part)


class ProcessManager:
    """Runs FFMPEG commands and reports exit status.

    ``execute`` never raises for a failing command: a non-zero exit, a
    missing binary or a timeout all come back as an unsuccessful
    :class:`ProcessResult`.
    """

    def __init__(
        self,
        ffmpeg_path: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize process manager.

        Args:
            ffmpeg_path: Path to ffmpeg executable. If None, searches PATH
                and falls back to the bare name ``ffmpeg``.
            timeout: Default maximum execution time in seconds (None = wait
                indefinitely).
        """
        self.ffmpeg_path = ffmpeg_path or shutil.which("ffmpeg") or "ffmpeg"
        self.timeout = timeout

    def execute(
        self,
        command: FFMPEGCommand | list[str],
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        """Execute an FFMPEG command synchronously.

        Args:
            command: FFMPEGCommand object or list of arguments.
            timeout: Maximum execution time in seconds. Defaults to the
                manager's timeout.

        Returns:
            ProcessResult with execution details.
        """
        if isinstance(command, FFMPEGCommand):
            args = command.to_args()
            output_path = command.outputs[0] if command.outputs else None
        else:
            args = list(command)
            output_path = None

        # Replace 'ffmpeg' with actual path
        if args and args[0] == "ffmpeg":
            args[0] = self.ffmpeg_path

        cmd_string = quote_command(args)
        timeout = timeout if timeout is not None else self.timeout
        logger.debug("Running: %s", cmd_string)

        try:
            result = subprocess.run(
                args,
                capture_output=True,
                text=True,
                errors="backslashreplace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("FFMPEG timed out after %ss: %s", timeout, cmd_string)
            return ProcessResult(
                success=False,
                return_code=-1,
                stdout="",
                stderr="Process timed out",
                command=cmd_string,
                output_path=output_path,
                error_message="Execution timed out",
            )
        except OSError as e:
            logger.warning("Could not start FFMPEG (%s): %s", self.ffmpeg_path, e)
            return ProcessResult(
                success=False,
                return_code=-1,
                stdout="",
                stderr=str(e),
                command=cmd_string,
                output_path=output_path,
                error_message=str(e),
            )

        success = result.returncode == 0
        error_message = None

        if not success:
            error_message = self._parse_error(result.stderr)
            logger.debug(
                "FFMPEG exited with return code %d: %s",
                result.returncode, error_message,
            )
            logger.debug("FFMPEG output:\n%s", result.stderr)

        return ProcessResult(
            success=success,
            return_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=cmd_string,
            output_path=output_path,
            error_message=error_message,
        )

    def _parse_error(self, stderr: str) -> str:
        """Extract meaningful error message from ffmpeg stderr."""
        lines = (stderr or "").strip().split("\n")

        # Look for common error patterns
        error_patterns = [
            r"Error.*",
            r"Invalid.*",
            r"No such file.*",
            r".*not found.*",
            r"Permission denied.*",
            r"does not contain any stream",
        ]

        for line in reversed(lines):
            for pattern in error_patterns:
                if re.search(pattern, line, re.IGNORECASE):
                    return line.strip()

        # Return last non-empty line if no pattern matched
        for line in reversed(lines):
            if line.strip():
                return line.strip()

        return "Unknown error"
