import logging
import os

import click


class ClickHandler(logging.Handler):
    """Writes records through click.echo to whatever stderr is current."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, msg."""

    def format(self, record: logging.LogRecord) -> str:
        from json import dumps

        base = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return dumps(base, ensure_ascii=False)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure the ``labelctl`` logger with a single stderr handler.
    WARNING by default, DEBUG when verbose. JSON lines when
    LABELCTL_JSON_LOGS is true.
    """
    logger = logging.getLogger("labelctl")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    # Avoid duplicate handlers on repeated CLI invocations in one process
    logger.handlers = []

    json_logs = os.environ.get("LABELCTL_JSON_LOGS", "false").lower() in ("1", "true", "yes")
    formatter: logging.Formatter
    if json_logs:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(message)s")

    handler = ClickHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
