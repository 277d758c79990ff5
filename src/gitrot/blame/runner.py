"""Run ``git blame`` via subprocess and stream its output to the reader."""

import io
import subprocess
import tempfile
from pathlib import Path
from typing import Union

from ..exceptions import BlameReadError, BlameUnavailableError
from ..logging_config import get_logger
from .models import AuthorshipRecord
from .reader import BlameReader

logger = get_logger(__name__)


class GitBlame:
    """Fetch per-line authorship for a committed file."""

    def __init__(self, git_executable: str = "git", timeout_seconds: int = 30):
        self.git_executable = git_executable
        self.timeout_seconds = timeout_seconds

    def __call__(self, path: Union[str, Path]) -> list[AuthorshipRecord]:
        return self.blame(path)

    def command(self, path: Path) -> list[str]:
        # Run from the file's directory so paths inside nested repos resolve
        return [
            self.git_executable,
            "-C",
            str(path.parent),
            "blame",
            "--line-porcelain",
            "--",
            path.name,
        ]

    def blame(self, path: Union[str, Path]) -> list[AuthorshipRecord]:
        """Blame ``path`` and parse the result.

        The porcelain output is read line by line from the pipe rather than
        buffered whole. git's stderr goes to a temporary file so a chatty
        git can never block on a full pipe while stdout is being read.

        Raises:
            BlameUnavailableError: git is missing, or produced no records
                (typically an untracked or uncommitted file).
            BlameReadError: The stream failed or git did not finish cleanly.
            BlameParseError: A record was malformed.
        """
        path = Path(path)
        cmd = self.command(path)
        logger.debug("Running %s", " ".join(cmd))

        with tempfile.TemporaryFile() as stderr_file:
            try:
                proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=stderr_file)
            except FileNotFoundError:
                raise BlameUnavailableError(
                    path, f"git executable not found: {self.git_executable}"
                )

            # Records end in "\n" only; a bare "\r" belongs to the line content
            stdout = io.TextIOWrapper(
                proc.stdout, encoding="utf-8", errors="replace", newline="\n"
            )
            try:
                records = BlameReader(path).read(stdout)
                returncode = proc.wait(timeout=self.timeout_seconds)
            except subprocess.TimeoutExpired:
                raise BlameReadError(
                    path, f"git blame did not exit within {self.timeout_seconds}s"
                )
            finally:
                if proc.poll() is None:
                    proc.kill()
                    proc.wait()
                stdout.close()

            stderr_file.seek(0)
            stderr = stderr_file.read().decode("utf-8", errors="replace").strip()

        if returncode != 0:
            if not records:
                raise BlameUnavailableError(path, stderr)
            raise BlameReadError(
                path, f"git blame exited with status {returncode}: {stderr}"
            )
        if not records:
            raise BlameUnavailableError(path, "git blame produced no output")

        logger.debug("Read %d blame records for %s", len(records), path)
        return records
