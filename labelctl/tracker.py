import logging
import time
from pathlib import Path
from typing import Callable, Optional

from .errors import PrintSubsystemError
from .models import (
    PrintJob, TrackOutcome,
    POLLING, COMPLETED, TIMED_OUT, CANCELLED,
    OUTCOME_COMPLETED, OUTCOME_TIMED_OUT, OUTCOME_SUBMISSION_FAILED, OUTCOME_JOB_ID_NOT_FOUND,
)
from .subsystem import PrintSubsystem

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60
DEFAULT_POLL_INTERVAL = 1.0


class JobTracker:
    """
    Submits one job at a time and follows it to a terminal state.

    submitted -> polling -> completed | cancelled | timed_out

    ``clock`` and ``sleep`` are injectable so the poll loop can run against
    a fake clock.
    """

    def __init__(
        self,
        subsystem: PrintSubsystem,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.subsystem = subsystem
        self.poll_interval = poll_interval
        self.clock = clock
        self.sleep = sleep

    def find_job_id(self, printer: str) -> Optional[str]:
        """First token of the first outstanding-job line that mentions ``printer``."""
        for line in self.subsystem.list_jobs().splitlines():
            if printer in line:
                parts = line.split()
                if len(parts) > 1:
                    return parts[0]
        return None

    def is_completed(self, job_id: str) -> bool:
        return job_id in self.subsystem.list_completed()

    def _cancel(self, job: PrintJob) -> None:
        try:
            rc = self.subsystem.cancel(job.job_id)
        except PrintSubsystemError as e:
            logger.error("Could not cancel job %s: %s", job.job_id, e)
            job.state = TIMED_OUT
            return
        if rc != 0:
            logger.error("Cancel of job %s exited with code %s", job.job_id, rc)
            job.state = TIMED_OUT
            return
        logger.info("Cancelled job %s", job.job_id)
        job.state = CANCELLED

    def wait_for_completion(self, job: PrintJob) -> bool:
        """
        Poll the completed listing until the job shows up or its timeout
        elapses (measured from submission). Cancels the job on timeout.
        """
        job.state = POLLING
        while self.clock() - job.submitted_at < job.timeout:
            if self.is_completed(job.job_id):
                job.state = COMPLETED
                return True
            self.sleep(self.poll_interval)

        logger.warning("Job %s did not complete within %ss", job.job_id, job.timeout)
        self._cancel(job)
        return False

    def submit_and_track(self, printer: str, path, timeout: float = DEFAULT_TIMEOUT) -> TrackOutcome:
        path = Path(path)
        rc = self.subsystem.submit(printer, str(path))
        submitted_at = self.clock()
        if rc != 0:
            logger.warning("Submission of %s to %s failed with code %s", path, printer, rc)
            return TrackOutcome(OUTCOME_SUBMISSION_FAILED)

        job_id = self.find_job_id(printer)
        if job_id is None:
            logger.warning("No outstanding job found for printer %s", printer)
            return TrackOutcome(OUTCOME_JOB_ID_NOT_FOUND)

        job = PrintJob(
            job_id=job_id,
            printer_name=printer,
            source_path=path,
            submitted_at=submitted_at,
            timeout=timeout,
        )
        logger.info("Tracking job %s for %s", job_id, path.name)

        if self.wait_for_completion(job):
            return TrackOutcome(OUTCOME_COMPLETED, job)
        return TrackOutcome(OUTCOME_TIMED_OUT, job)
