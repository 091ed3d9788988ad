"""
File operation utilities

Async read and atomic replace-on-success write for small snapshot files.
"""
import logging
import os
import tempfile
from pathlib import Path

import aiofiles


logger = logging.getLogger(__name__)


async def read_file(path: Path) -> bytes:
    """
    Read a whole file asynchronously

    Raises:
        OSError: If the file is missing or unreadable
    """
    async with aiofiles.open(path, "rb") as f:
        return await f.read()


async def write_file_atomic(path: Path, data: bytes) -> Path:
    """
    Write data to path, replacing any existing file only once fully written

    The payload goes to a temporary file in the destination directory which is
    then renamed over the target, so readers never observe a partial file.
    Parent directories are created as needed.

    Args:
        path: Destination file
        data: Bytes to write

    Returns:
        The destination path

    Raises:
        OSError: If the directory, temporary file or rename fails
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    os.close(fd)
    temp_file = Path(tmp_name)

    try:
        async with aiofiles.open(temp_file, "wb") as f:
            await f.write(data)
        os.replace(temp_file, path)
    except OSError:
        delete_file(temp_file, label="temporary file")
        raise

    logger.debug(f"Wrote {len(data) / 1024:.1f} KB to {path}")
    return path


def delete_file(file_path: Path, label: str = "file") -> bool:
    """
    Safely delete a file

    Args:
        file_path: Path to file to delete
        label: What the file is, for log messages

    Returns:
        True if deleted successfully, False otherwise
    """
    if not file_path or not file_path.exists():
        return False

    try:
        file_path.unlink()
        logger.debug(f"Deleted {label}: {file_path}")
        return True
    except (OSError, PermissionError) as e:
        logger.warning(f"Failed to delete {label} {file_path}: {e}")
        return False
