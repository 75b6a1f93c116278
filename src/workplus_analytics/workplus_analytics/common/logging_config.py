import json
import logging
import sys
from datetime import datetime, timezone

# `extra=` keys copied onto JSON log lines when a record carries them.
EXTRA_FIELDS = ("dashboard", "record_count")

TEXT_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

# Third-party loggers that drown out engine logs at DEBUG.
QUIET_LOGGERS = ("werkzeug",)


class JSONFormatter(logging.Formatter):
    def format(self, record):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Install one stdout handler on the root logger.

    Called once from ``create_app``; repeated calls replace the handler
    instead of stacking another one.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers = [handler]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
