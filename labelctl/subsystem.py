"""
Print subsystem adapters.

Everything that shells out to CUPS lives here, behind the small
``PrintSubsystem`` interface, so the tracker and directory code only ever
see raw text listings and exit codes.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .errors import PrintSubsystemError

logger = logging.getLogger(__name__)


class PrintSubsystem(ABC):
    """Query and action surface of a local print subsystem."""

    @abstractmethod
    def list_printers(self) -> str:
        """All registered printers, one per line; name is the second token."""

    @abstractmethod
    def list_jobs(self) -> str:
        """Outstanding jobs, one per line; job id is the first token."""

    @abstractmethod
    def list_completed(self) -> str:
        """Completed jobs listing."""

    @abstractmethod
    def submit(self, printer: str, path: str) -> int:
        """Submit ``path`` to ``printer`` in raw mode. Returns the exit status."""

    @abstractmethod
    def cancel(self, job_id: str) -> int:
        """Cancel a job. Returns the exit status."""


class CupsSubsystem(PrintSubsystem):
    """CUPS via ``lpstat``, ``lpr`` and ``cancel``."""

    def __init__(self, lpstat_cmd: str = "lpstat", lpr_cmd: str = "lpr", cancel_cmd: str = "cancel"):
        self.lpstat_cmd = lpstat_cmd
        self.lpr_cmd = lpr_cmd
        self.cancel_cmd = cancel_cmd

    @classmethod
    def from_settings(cls, settings) -> "CupsSubsystem":
        return cls(settings.lpstat_cmd, settings.lpr_cmd, settings.cancel_cmd)

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        cmd = " ".join(args)
        logger.debug("Running %s", cmd)
        try:
            result = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                errors="replace",
                stdin=subprocess.DEVNULL,
            )
        except OSError as e:
            raise PrintSubsystemError(cmd, e.strerror or str(e)) from e

        if result.stdout:
            logger.debug("%s stdout:\n%s", cmd, result.stdout.rstrip())
        if result.stderr:
            logger.debug("%s stderr:\n%s", cmd, result.stderr.rstrip())
        return result

    def _query(self, args: List[str]) -> str:
        result = self._run(args)
        if result.returncode != 0:
            logger.warning(
                "%s exited with code %s: %s",
                " ".join(args), result.returncode, (result.stderr or "").strip(),
            )
        return result.stdout or ""

    def list_printers(self) -> str:
        return self._query([self.lpstat_cmd, "-p"])

    def list_jobs(self) -> str:
        return self._query([self.lpstat_cmd, "-o"])

    def list_completed(self) -> str:
        return self._query([self.lpstat_cmd, "-W", "completed"])

    def submit(self, printer: str, path: str) -> int:
        result = self._run([self.lpr_cmd, "-P", printer, "-o", "raw", str(path)])
        if result.returncode != 0:
            logger.warning("%s failed with code %s: %s", self.lpr_cmd, result.returncode, (result.stderr or "").strip())
        return result.returncode

    def cancel(self, job_id: str) -> int:
        return self._run([self.cancel_cmd, job_id]).returncode


def get_subsystem(settings=None, subsystem: Optional[PrintSubsystem] = None) -> PrintSubsystem:
    if subsystem is not None:
        return subsystem
    if settings is None:
        return CupsSubsystem()
    return CupsSubsystem.from_settings(settings)
