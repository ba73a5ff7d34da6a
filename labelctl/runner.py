import logging
from typing import Callable, List, Optional

import click

from .config import Settings
from .directory import list_printers
from .errors import FileQueueError, PrintSubsystemError
from .files import discover_pending, confirm_batch_if_needed, mark_used
from .models import (
    BatchReport, FileResult,
    OUTCOME_COMPLETED, OUTCOME_TIMED_OUT, OUTCOME_SUBMISSION_FAILED, OUTCOME_JOB_ID_NOT_FOUND,
)
from .subsystem import PrintSubsystem, get_subsystem
from .tracker import JobTracker

logger = logging.getLogger(__name__)


def _default_prompt(text: str) -> str:
    return click.prompt(text, default="", show_default=False)


def select_printer(printers: List[str], choice) -> str:
    """Resolve a 1-based selection. Raises ValueError on bad input."""
    try:
        index = int(str(choice).strip())
    except (TypeError, ValueError):
        raise ValueError("Invalid input.")
    if index < 1 or index > len(printers):
        raise ValueError("Invalid printer number.")
    return printers[index - 1]


def process_files(
    printer: str,
    settings: Settings,
    subsystem: Optional[PrintSubsystem] = None,
    tracker: Optional[JobTracker] = None,
    prompt: Callable[[str], str] = _default_prompt,
    echo: Callable = click.secho,
) -> BatchReport:
    """
    Print every pending label file on ``printer``, one at a time, marking each
    as used only after its job completes. Failures stay with their file.

    FileQueueError propagates if the watched directory cannot be read.
    """
    subsystem = get_subsystem(settings, subsystem)
    tracker = tracker or JobTracker(subsystem, poll_interval=settings.poll_interval)
    report = BatchReport(printer=printer)

    files = discover_pending(settings.watch_dir, settings.label_ext)
    report.discovered = len(files)
    if not files:
        echo(f"No .{settings.label_ext} files found in {settings.watch_dir}", fg="yellow")
        return report

    if not confirm_batch_if_needed(len(files), prompt):
        echo("Files will not be marked as used. Exiting.", fg="yellow")
        report.aborted = True
        return report

    for qf in files:
        result = FileResult(file=qf)
        report.results.append(result)
        echo(f"Attempting to print {qf.path}")

        try:
            outcome = tracker.submit_and_track(printer, qf.path, timeout=settings.timeout_seconds)
        except PrintSubsystemError as e:
            result.error = str(e)
            echo(f"Error: {e}", fg="red")
            continue
        result.outcome = outcome

        if outcome.kind == OUTCOME_SUBMISSION_FAILED:
            echo(f"Failed to start print job on {printer}", fg="red")
        elif outcome.kind == OUTCOME_JOB_ID_NOT_FOUND:
            echo("Could not find the job ID for the print job.", fg="red")
        elif outcome.kind == OUTCOME_TIMED_OUT:
            echo(
                f"Print job {outcome.job_id} did not complete within "
                f"{settings.timeout_seconds}s ({outcome.job.state}).",
                fg="red",
            )
        elif outcome.kind == OUTCOME_COMPLETED:
            echo(f"Print job {outcome.job_id} completed. Marking {qf.path} as used.", fg="green")
            try:
                mark_used(qf, settings.used_ext)
            except FileQueueError as e:
                result.error = str(e)
                echo(f"Error: {e}", fg="red")

    if len(files) > 1:
        echo(f"Please re-download the .{settings.label_ext} files.", fg="cyan")

    logger.info(
        "Batch on %s: %d discovered, %d used, %d left pending",
        printer, report.discovered, len(report.used), len(report.failed),
    )
    return report


def run(
    settings: Settings,
    subsystem: Optional[PrintSubsystem] = None,
    tracker: Optional[JobTracker] = None,
    choice=None,
    prompt: Callable[[str], str] = _default_prompt,
    echo: Callable = click.secho,
) -> BatchReport:
    """
    Full flow: find printers, let the operator choose, then process files.
    Operator mistakes end the run with a message, never an exception.
    PrintSubsystemError / FileQueueError propagate as startup errors.
    """
    subsystem = get_subsystem(settings, subsystem)
    printers = list_printers(subsystem, settings.base_name, settings.extra_names)
    if not printers:
        echo(
            f"No printers found with base name '{settings.base_name}' or specified names.",
            fg="yellow",
        )
        return BatchReport()

    echo("Available printers:")
    for i, name in enumerate(printers, start=1):
        echo(f"{i}: {name}")

    if choice is None:
        choice = prompt("Enter the number of the printer you want to use")
    try:
        printer = select_printer(printers, choice)
    except ValueError as e:
        echo(f"{e} Exiting.", fg="red")
        return BatchReport(aborted=True)

    echo(f"Selected printer: {printer}", fg="cyan")
    report = process_files(printer, settings, subsystem, tracker, prompt=prompt, echo=echo)
    echo("Script completed.")
    return report
