"""
Label file queue.

A file is pending while it still carries the label extension and becomes
used once it has been printed, by renaming it to the used extension.
"""

import logging
import os
from pathlib import Path
from typing import Callable, List

from .errors import FileQueueError
from .models import QueuedFile, PENDING, USED

logger = logging.getLogger(__name__)

AFFIRMATIVE = ("y", "yes")


def discover_pending(directory, label_ext: str = "zpl") -> List[QueuedFile]:
    """
    Regular files in ``directory`` whose extension matches ``label_ext``
    (case-insensitive), sorted by name.
    Raises FileQueueError if the directory cannot be read.
    """
    directory = Path(directory)
    wanted = "." + label_ext.lower().lstrip(".")
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise FileQueueError(f"Failed to read directory {directory}: {e.strerror or e}") from e

    pending = []
    for entry in entries:
        path = Path(entry.path)
        if path.suffix.lower() != wanted:
            continue
        try:
            if not entry.is_file():
                continue
        except OSError:
            logger.warning("Skipping unreadable entry %s", path)
            continue
        pending.append(QueuedFile(path=path))
    logger.debug("Pending files in %s: %s", directory, [f.name for f in pending])
    return pending


def confirm_batch_if_needed(count: int, prompt: Callable[[str], str]) -> bool:
    """
    Ask once before processing more than one file. Only y/yes continues;
    any other answer aborts the whole batch.
    """
    if count <= 1:
        return True
    answer = prompt(
        f"{count} label files found. Do you want to mark them as used after printing? (y/n)"
    )
    return (answer or "").strip().lower() in AFFIRMATIVE


def mark_used(file: QueuedFile, used_ext: str = "used") -> QueuedFile:
    """
    Rename ``file`` so its extension becomes ``used_ext``.
    Raises FileQueueError if the rename fails; the file then stays pending.
    """
    if file.state != PENDING:
        raise FileQueueError(f"{file.path} is already {file.state}")
    target = file.path.with_suffix("." + used_ext.lstrip("."))
    try:
        file.path.replace(target)
    except OSError as e:
        raise FileQueueError(f"Failed to mark {file.path} as used: {e.strerror or e}") from e
    logger.info("Renamed %s -> %s", file.path, target.name)
    file.path = target
    file.state = USED
    return file
