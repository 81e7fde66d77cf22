"""Logging configuration for the Tilgin restart tool."""

import logging

import colorlog

log = logging.getLogger("tilgin-restart")

_LOG_COLORS = {
    "DEBUG":    "cyan",
    "INFO":     "green",
    "WARNING":  "yellow",
    "ERROR":    "red",
    "CRITICAL": "bold_red",
}


class FieldsFormatter(colorlog.ColoredFormatter):
    """
    Append structured key/value pairs to the rendered message.

    Call sites attach them with ``extra={"fields": {...}}``::

        log.info("Router is reachable", extra={"fields": {"attempt": 3}})

    renders as ``... Router is reachable attempt=3``.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            message += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return message


def fields(**kwargs) -> dict:
    """Shorthand for ``extra={"fields": kwargs}``."""
    return {"fields": kwargs}


def _setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setFormatter(FieldsFormatter(
        "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
        datefmt="%H:%M:%S",
        log_colors=_LOG_COLORS,
    ))
    log.addHandler(handler)

    if debug:
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
