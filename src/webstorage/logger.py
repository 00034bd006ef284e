import json
import logging
from datetime import UTC, datetime


class StructuredLogger:
    """Thin wrapper that emits structured JSON events via the standard
    logging system. The JSON document is written as the message so it flows
    through the configured handlers and formatters.
    """

    def __init__(self, name: str = "webstorage.events"):
        self._logger = logging.getLogger(name)

    def log_event(self, event: str, level: int = logging.INFO, **kwargs) -> None:
        """Emit a structured event. Common usage:

        logger.log_event("storage_out_of_space", global_limit=..., extra={...})
        """
        payload = {"timestamp": datetime.now(UTC).isoformat(), "event": event}

        # `extra` dict keys are merged at top level
        for k, v in kwargs.items():
            if k == "extra" and isinstance(v, dict):
                payload.update(v)
            else:
                payload[k] = v

        self._logger.log(level, json.dumps(payload, default=str))

    def debug(self, msg: str, *args, **kwargs):
        return self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        return self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        return self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        return self._logger.error(msg, *args, **kwargs)


# Single logger instance shared by the project and tests
logger = StructuredLogger()

__all__ = ["logger", "StructuredLogger"]
