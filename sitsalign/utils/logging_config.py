"""Logging setup for alignment jobs.

Records go to the console and, as JSON lines, to ``app.jsonl`` in the log
directory. Errors are also written to ``errors.jsonl``; a failed alignment job
logs its failure context there (see run_alignment_job).
"""

import logging
import sys
import json
from pathlib import Path
from datetime import datetime
from typing import Optional

from sitsalign.data.structs import AlignmentSettings

APP_LOG = "app.jsonl"
ERROR_LOG = "errors.jsonl"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "lineNo": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # extra={"props": {...}}, e.g. the failure context of a job
        props = getattr(record, "props", None)
        if props:
            log_obj.update(props)
            failure = props.get("failure")
            if isinstance(failure, dict) and "job_id" in failure:
                log_obj.setdefault("job_id", failure["job_id"])

        return json.dumps(log_obj, default=str)


def setup_logging(
    log_level: Optional[str] = None,
    log_dir: Optional[str] = None,
    settings: Optional[AlignmentSettings] = None,
) -> None:
    """
    Configure the root logger for alignment jobs.

    Args:
        log_level: Logging level (INFO, DEBUG, etc.); defaults to settings.log_level
        log_dir: Directory of the JSON log files; defaults to settings.log_dir
        settings: Settings loaded from the ``logging`` section of the job config
    """
    settings = settings or AlignmentSettings()
    level = (log_level or settings.log_level).upper()
    directory = Path(log_dir or settings.log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    root_logger.addHandler(console_handler)

    file_handler = logging.FileHandler(directory / APP_LOG)
    file_handler.setLevel(level)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    error_handler = logging.FileHandler(directory / ERROR_LOG)
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(error_handler)

    logging.getLogger(__name__).info(f"Alignment logs at level {level} in {directory}")
