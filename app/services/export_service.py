"""Zip archive of the project source tree for the download endpoint."""
import io
import logging
import os
import zipfile
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

SKIPPED_DIRS = frozenset({"__pycache__", ".pytest_cache", ".git", "node_modules", ".venv", "logs"})
SKIPPED_SUFFIXES = (".pyc", ".pyo")


def _iter_dir_files(directory: Path):
    for current, dirs, files in os.walk(directory):
        dirs[:] = sorted(d for d in dirs if d not in SKIPPED_DIRS)
        for name in sorted(files):
            if not name.endswith(SKIPPED_SUFFIXES):
                yield Path(current) / name


def build_source_archive(root: str, include_dirs: Iterable[str], include_files: Iterable[str]) -> bytes:
    """
    Zip the listed directories and files under ``root``.

    Missing entries are skipped. Archive paths are relative to ``root``.
    """
    root_path = Path(root).resolve()
    buffer = io.BytesIO()
    count = 0

    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for name in include_dirs:
            directory = root_path / name
            if not directory.is_dir():
                continue
            for file_path in _iter_dir_files(directory):
                archive.write(file_path, file_path.relative_to(root_path).as_posix())
                count += 1

        for name in include_files:
            file_path = root_path / name
            if file_path.is_file():
                archive.write(file_path, name)
                count += 1

    logger.info(f"Built source archive from {root_path} ({count} files)")
    return buffer.getvalue()
