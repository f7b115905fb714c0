# cached_externals/utils/file_utils.py
"""File operation utilities"""

import os
import shutil
from pathlib import Path
from typing import Union


def remove_path(path: Union[str, Path]) -> bool:
    """
    Remove a file, symlink or directory tree if present

    Symlinks are unlinked, never followed.

    Args:
        path: Path to remove

    Returns:
        True if something was removed
    """
    path = Path(path)

    if path.is_symlink() or path.is_file():
        path.unlink()
        return True

    if path.is_dir():
        shutil.rmtree(path)
        return True

    return False


def force_symlink(source: Union[str, Path], link: Union[str, Path]) -> Path:
    """
    Create ``link`` pointing at ``source``, replacing an existing link

    Args:
        source: Link target
        link: Symlink path to create

    Returns:
        The symlink path
    """
    link = Path(link)
    link.parent.mkdir(parents=True, exist_ok=True)

    if link.is_symlink() or link.is_file():
        link.unlink()

    os.symlink(str(source), str(link))
    return link
