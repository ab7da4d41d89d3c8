"""
Logging utilities for verdicts and classifier diagnostics.
"""

import datetime
import json
import logging
import logging.handlers
import os
from typing import Optional

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None,
                  max_size_mb: int = 10, backup_count: int = 3) -> logging.Logger:
    """Configure console logging and an optional rotating log file."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter("%(asctime)s  %(levelname)-5s  %(message)s", datefmt="%H:%M:%S"))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)-7s] %(name)-25s | %(message)s", datefmt="%H:%M:%S"))
        root_logger.addHandler(file_handler)

    return root_logger


class TuningLogger:
    """
    Records every verdict for offline threshold tuning.

    Each verdict is summarised through ``logging`` and, when a debug file is
    given, appended to it as one JSON line.
    """

    def __init__(self, debug_file: Optional[str] = None):
        self.debug_file = None
        self.count = 0
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'a')
            except OSError as e:
                logger.warning("Could not open tuning log %s: %s", debug_file, e)

    def log_verdict(self, verdict) -> None:
        self.count += 1
        scores = " ".join(f"{tag}={score:g}" for tag, score in verdict.scores.items())
        logger.info("%s aggregate=%.2f threshold=%.2f | %s",
                    verdict.decision.value.upper(), verdict.aggregate, verdict.threshold, scores)
        if verdict.failed:
            logger.warning("Classifiers failed and were substituted: %s", ", ".join(verdict.failed))

        if self.debug_file:
            entry = verdict.as_dict()
            entry['timestamp'] = datetime.datetime.now().isoformat(timespec='milliseconds')
            try:
                self.debug_file.write(json.dumps(entry) + "\n")
                self.debug_file.flush()
            except (OSError, ValueError) as e:
                logger.warning("Could not write tuning log entry: %s", e)

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
