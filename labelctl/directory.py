import logging
from typing import Iterable, List

from .subsystem import PrintSubsystem

logger = logging.getLogger(__name__)


def list_printers(subsystem: PrintSubsystem, base_name: str, extra_names: Iterable[str] = ()) -> List[str]:
    """
    Printers whose status line contains ``base_name`` (so OS-added suffixes
    like ``-1`` still match) or whose name is exactly one of ``extra_names``.

    Keeps the order the subsystem reports and does not de-duplicate.
    PrintSubsystemError propagates.
    """
    extras = set(extra_names)
    printers = []
    for line in subsystem.list_printers().splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        name = parts[1]
        if base_name in line or name in extras:
            printers.append(name)
    logger.debug("Matched printers: %s", printers)
    return printers
