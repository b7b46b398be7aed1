"""
Filesystem helpers used when checking function paths.
"""

import os
from pathlib import Path


def file_exists(path: str) -> bool:
    """True for any existing entry, file or directory."""
    return os.path.exists(path)


def is_directory(path: str) -> bool:
    return os.path.isdir(path)


def get_cwd() -> str:
    return str(Path.cwd())


def containing_dir(path: str) -> str:
    """The directory holding a function: the path itself, or its parent for a file."""
    if is_directory(path):
        return path
    return os.path.dirname(path)
