from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides log root resolution, safe directory creation and directory listing.
Acts as an abstraction over 'os' so that the sinks share one uniform view of
Windows and Unix-like systems.
"""

import logging
import os
from typing import Optional, Set, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "XTILoger"
DOCUMENTS_DIR_NAME = "Documents"
HOME_ENV_VAR = "XTILOGER_HOME"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_log_root() -> str:
    """
    Resolve the root directory that holds every logger's files.

    Standards:
    - XTILOGER_HOME when set.
    - Otherwise <home>/Documents/XTILoger on every platform.

    Does not create the directory.

    Returns:
        str: Absolute path to the log root.
    """
    override = (os.environ.get(HOME_ENV_VAR) or "").strip()
    if override:
        return os.path.abspath(os.path.expandvars(os.path.expanduser(override)))

    try:
        home = os.path.expanduser("~")
    except Exception:
        home = os.getcwd()
    return os.path.abspath(os.path.join(home, DOCUMENTS_DIR_NAME, APP_DIR_NAME))


def build_log_directory(root: Optional[str], sub_directory: str, logger_name: str) -> str:
    """
    Join the root, optional sub-directory and logger name.

    Empty components are skipped so that no doubled separators appear.

    Args:
        root: Root override; falls back to get_log_root() when empty.
        sub_directory: Optional namespace under the root.
        logger_name: Name of the logger owning the directory.

    Returns:
        str: Absolute path of the logger's directory.
    """
    base = os.path.abspath(os.path.expanduser(root)) if root else get_log_root()
    parts = [p.strip("/\\") for p in (sub_directory, logger_name) if p and p.strip("/\\")]
    return os.path.join(base, *parts)

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


def touch_file(path: str) -> Tuple[bool, Optional[str]]:
    """
    Create an empty file if nothing exists at the path. Never truncates.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        # 'x' fails on an existing file instead of truncating it
        with open(path, "x", encoding="utf-8"):
            pass
        return True, None
    except FileExistsError:
        return True, None
    except OSError as e:
        return False, str(e)


def list_files(directory: str) -> Set[str]:
    """
    Names of the regular files directly inside a directory.

    Returns:
        Set[str]: File names; empty if the directory is missing or unreadable.
    """
    try:
        with os.scandir(directory) as entries:
            return {entry.name for entry in entries if entry.is_file()}
    except OSError as e:
        logger.debug(f"Cannot list '{directory}': {e}")
        return set()
