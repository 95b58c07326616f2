"""Report output directory: creation, cleanup and file writes."""

from __future__ import annotations

import shutil
from pathlib import Path

from .core.exceptions import AttachmentCopyError, ReportWriteError
from .logging import get_logger

DEFAULT_OUTPUT_DIRECTORY = Path("allure-report")


class ReportDirectory:
    """Directory that receives suite documents and attachment copies."""

    def __init__(self, path: Path | str = DEFAULT_OUTPUT_DIRECTORY, clean: bool = False):
        """Create the directory if needed.

        Args:
            path: Output directory.
            clean: Remove files left in the directory by a previous run.
        """
        self.path = Path(path)
        self._logger = get_logger(__name__)
        self.path.mkdir(parents=True, exist_ok=True)
        if clean:
            self.clean()

    def clean(self) -> int:
        """Delete top-level files, leaving subdirectories alone.

        Returns:
            Number of files removed.
        """
        removed = 0
        for entry in self.path.iterdir():
            if entry.is_file():
                entry.unlink()
                removed += 1
        self._logger.info("output_directory_cleaned", path=str(self.path), removed=removed)
        return removed

    def write_report(self, file_name: str, document: str) -> Path:
        """Write a suite document and return its path.

        Raises:
            ReportWriteError: If the file cannot be written.
        """
        target = self.path / file_name
        try:
            target.write_text(document, encoding="utf-8")
        except OSError as e:
            raise ReportWriteError(target) from e
        return target

    def copy_attachment(self, source: Path, file_name: str) -> Path:
        """Copy ``source`` into the directory under ``file_name``.

        Raises:
            AttachmentCopyError: If the copy fails.
        """
        target = self.path / file_name
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            raise AttachmentCopyError(source, target) from e
        return target
