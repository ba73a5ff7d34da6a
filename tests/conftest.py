from typing import List, Optional

import pytest

from labelctl.errors import PrintSubsystemError
from labelctl.subsystem import PrintSubsystem

LPSTAT_P = """\
printer HP-LaserJet-400 is idle.  enabled since Sat 18 Oct 2026 09:00:00
printer ZTC-ZP-450-200dpi is idle.  enabled since Sat 18 Oct 2026 09:00:00
printer ZTC-ZP-450-200dpi-2 disabled since Sat 18 Oct 2026 09:00:00 -
printer Brother-QL-700 is idle.  enabled since Sat 18 Oct 2026 09:00:00
printer zprint is idle.  enabled since Sat 18 Oct 2026 09:00:00
"""


class FakeClock:
    """Monotonic clock whose sleep just advances time."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeSubsystem(PrintSubsystem):
    """
    Scripted print subsystem. Each successful submit queues a job
    ``<printer>-<n>`` which shows up as completed once the clock reaches
    ``completes_after`` seconds past submission (never, when None).
    """

    def __init__(
        self,
        clock: FakeClock,
        printers: str = LPSTAT_P,
        completes_after: Optional[float] = 0,
        submit_rc: int = 0,
        cancel_rc: int = 0,
        list_jobs_for_printer: bool = True,
        cancel_raises: bool = False,
    ):
        self.clock = clock
        self.printers = printers
        self.completes_after = completes_after
        self.submit_rc = submit_rc
        self.cancel_rc = cancel_rc
        self.list_jobs_for_printer = list_jobs_for_printer
        self.cancel_raises = cancel_raises
        self.submissions: List[tuple] = []
        self.cancels: List[str] = []
        self.completed_polls = 0
        self._jobs: List[dict] = []
        self._next_id = 41

    def list_printers(self) -> str:
        return self.printers

    def list_jobs(self) -> str:
        lines = ["other-printer-7 alice 2048 Sat 18 Oct 2026 09:00:00"]
        if self.list_jobs_for_printer:
            for job in self._jobs:
                if job["id"] not in self.cancels and not job.get("reported"):
                    lines.append(f"{job['id']} labeluser 1024 Sat 18 Oct 2026 09:01:00")
        return "\n".join(lines) + "\n"

    def _done(self, job) -> bool:
        return self.completes_after is not None and self.clock() - job["at"] >= self.completes_after

    def list_completed(self) -> str:
        self.completed_polls += 1
        done = [job for job in self._jobs if self._done(job)]
        for job in done:
            job["reported"] = True
        return "".join(f"{job['id']} labeluser 1024 Sat 18 Oct 2026 09:01:03\n" for job in done)

    def submit(self, printer: str, path: str) -> int:
        self.submissions.append((printer, path))
        if self.submit_rc == 0:
            self._jobs.append({"id": f"{printer}-{self._next_id}", "at": self.clock()})
            self._next_id += 1
        return self.submit_rc

    def cancel(self, job_id: str) -> int:
        if self.cancel_raises:
            raise PrintSubsystemError("cancel " + job_id, "No such file or directory")
        self.cancels.append(job_id)
        return self.cancel_rc


class Console:
    """Collects echo output and answers prompts from a script."""

    def __init__(self, answers=()):
        self.lines: List[str] = []
        self.prompts: List[str] = []
        self.answers = list(answers)

    def echo(self, message="", **kwargs):
        self.lines.append(message)

    def prompt(self, text):
        self.prompts.append(text)
        return self.answers.pop(0) if self.answers else ""

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_subsystem(clock):
    def _make(**kwargs):
        return FakeSubsystem(clock, **kwargs)
    return _make


@pytest.fixture
def console():
    return Console()


@pytest.fixture
def label_dir(tmp_path):
    d = tmp_path / "Downloads"
    d.mkdir()
    return d
