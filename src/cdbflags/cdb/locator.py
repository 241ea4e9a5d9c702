import os
from pathlib import Path
from typing import Dict, Optional

DATABASE_NAME = "compile_commands.json"


def find_compile_commands(start_path: str, db_name: str = DATABASE_NAME) -> Optional[Path]:
    """
    Walks from `start_path` up to the filesystem root looking for `db_name`.
    `start_path` may be a file (search starts in its directory) or a directory.
    Returns the first database found, nearest first.
    """
    current = os.path.abspath(start_path)
    if not os.path.isdir(current):
        current = os.path.dirname(current)

    while True:
        candidate = os.path.join(current, db_name)
        if os.path.isfile(candidate):
            return Path(candidate)
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def find_registered_database(file_path: str, projects: Dict[str, str]) -> Optional[Path]:
    """
    Looks up an explicitly registered database for `file_path`.
    `projects` maps a project root to its database path; the longest root
    that prefixes `file_path` wins. Registrations pointing at a missing file
    are ignored.
    """
    best_root = None
    best_db = None
    for root, db_path in projects.items():
        root = os.path.join(os.path.abspath(os.path.expanduser(root)), "")
        if file_path.startswith(root) and (best_root is None or len(root) > len(best_root)):
            best_root = root
            best_db = db_path

    if best_db is None:
        return None

    db = Path(os.path.expanduser(best_db))
    if not db.is_absolute():
        db = Path(best_root) / db
    return db if db.is_file() else None


def locate_database(file_path: str,
                    search_start: Optional[str] = None,
                    projects: Optional[Dict[str, str]] = None,
                    db_name: str = DATABASE_NAME) -> Optional[Path]:
    """Registered project database first, then the ancestor walk."""
    if projects:
        registered = find_registered_database(os.path.abspath(file_path), projects)
        if registered:
            return registered

    start = search_start or file_path or os.getcwd()
    return find_compile_commands(start, db_name)
