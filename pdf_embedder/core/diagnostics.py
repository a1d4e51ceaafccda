"""
Append-only diagnostic log for a batch run.
File: pdf_embedder/core/diagnostics.py

Per-file problems are not shown as they happen; they are written to a
log file that is created on the first entry, next to the output folder:

    Embed PDF Pages Script Log
    OS: Linux-6.1.0-x86_64
    Preview host (pdf-page-embedder 20201014)

    2020-10-14 T09:30:12 - Error creating regular expression for source file, "x.psd".
"""

import logging
import platform

from pathlib import Path
from typing import Optional

from pdf_embedder.constants import SCRIPT_NAME, LOG_FILE_NAME


LOG_FORMAT = '%(asctime)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d T%H:%M:%S'


def describe_error(error: BaseException) -> str:
    """Error text with its origin: host context when known, else the raising line."""
    context = getattr(error, 'context', None)
    if not context:
        tb = error.__traceback__
        while tb is not None and tb.tb_next is not None:
            tb = tb.tb_next
        if tb is not None:
            context = f"line {tb.tb_lineno}"
    return f"{error} @ {context}" if context else str(error)


class RunLog:
    """
    Lazily created log file counting its entries.

    Usage:
        run_log = RunLog(config.log_folder, host_description=host.describe())
        run_log.log('Error placing file', error)
        run_log.close()
    """

    def __init__(self, log_folder: Path, enabled: bool = True,
                 host_description: Optional[str] = None):
        self.path = Path(log_folder) / LOG_FILE_NAME
        self.enabled = enabled
        self.host_description = host_description
        self.count = 0

        self._handler = None
        self._logger = logging.getLogger(f"{__name__}.{id(self):x}")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

    def _start(self):
        """Write the header (replacing any previous log) and attach the file handler."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(f"{SCRIPT_NAME} Script Log\n")
            f.write(f"OS: {platform.platform()}\n")
            if self.host_description:
                f.write(f"{self.host_description}\n")
            f.write("\n")

        self._handler = logging.FileHandler(self.path, mode='a', encoding='utf-8')
        self._handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        self._logger.addHandler(self._handler)

    def log(self, message: str, error: Optional[BaseException] = None):
        """Append one timestamped entry, with error details on a second line."""
        if not self.enabled:
            return

        if self._handler is None:
            self._start()

        if error is not None:
            message = f"{message}\n{describe_error(error)}"

        self._logger.info(message)
        self.count += 1

    @property
    def has_entries(self) -> bool:
        return self.count > 0

    def close(self):
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None


# End of file #
