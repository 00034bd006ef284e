import logging
from logging import config as logging_config


class ColoredFormatter(logging.Formatter):
    """Logging formatter that injects ANSI color codes based on levelname.

    INFO -> green, WARNING -> yellow, ERROR -> red, DEBUG -> cyan, CRITICAL -> red background.
    """

    COLOR_MAP = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[41m",
    }
    RESET = "\x1b[0m"

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        color = self.COLOR_MAP.get(original_levelname, "")
        record.levelname = f"{color}{original_levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


def configure_logging(level: str = "INFO", decision_level: str | None = None, event_level: str | None = None) -> None:
    """Configure process logging to write colored logs to stdout.

    Args:
        level: Level of the root logger and of uvicorn
        decision_level: Level of the `webstorage` loggers, DEBUG shows every quota decision
        event_level: Level of the structured `webstorage.events` stream
    """
    decision_level = decision_level or level
    event_level = event_level or decision_level

    default_fmt = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
    access_fmt = "%(asctime)s %(levelname)-5s %(message)s"

    cfg = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"()": "webstorage.logging_config.ColoredFormatter", "format": default_fmt, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "access": {"()": "webstorage.logging_config.ColoredFormatter", "format": access_fmt, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "default": {"class": "logging.StreamHandler", "formatter": "default", "stream": "ext://sys.stdout"},
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
        },
        "loggers": {
            # Both propagate to the root handler; only their thresholds differ
            "webstorage": {"level": decision_level},
            "webstorage.events": {"level": event_level},
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
        },
        "root": {"handlers": ["default"], "level": level},
    }

    logging_config.dictConfig(cfg)


__all__ = ["configure_logging", "ColoredFormatter"]
