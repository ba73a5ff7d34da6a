from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# File states
PENDING = "pending"
USED = "used"

# Job states
SUBMITTED = "submitted"
POLLING = "polling"
COMPLETED = "completed"
TIMED_OUT = "timed_out"   # timeout fired, cancel failed
CANCELLED = "cancelled"   # timeout fired, cancel accepted

# Tracking outcomes
OUTCOME_COMPLETED = "completed"
OUTCOME_TIMED_OUT = "timed_out"
OUTCOME_SUBMISSION_FAILED = "submission_failed"
OUTCOME_JOB_ID_NOT_FOUND = "job_id_not_found"


@dataclass
class PrintJob:
    job_id: str
    printer_name: str
    source_path: Path
    submitted_at: float
    timeout: float
    state: str = SUBMITTED


@dataclass
class QueuedFile:
    path: Path
    state: str = PENDING

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class TrackOutcome:
    kind: str
    job: Optional[PrintJob] = None

    @property
    def completed(self) -> bool:
        return self.kind == OUTCOME_COMPLETED

    @property
    def job_id(self) -> Optional[str]:
        return self.job.job_id if self.job else None


@dataclass
class FileResult:
    file: QueuedFile
    outcome: Optional[TrackOutcome] = None
    error: Optional[str] = None


@dataclass
class BatchReport:
    printer: Optional[str] = None
    discovered: int = 0
    aborted: bool = False
    results: List[FileResult] = field(default_factory=list)

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.results if r.file.state != USED]

    @property
    def used(self) -> List[QueuedFile]:
        return [r.file for r in self.results if r.file.state == USED]
