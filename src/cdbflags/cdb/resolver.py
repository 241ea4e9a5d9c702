import os
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple
from .loader import FileCompilationDatabase
from .normalizer import NormalizedEntry, expand_path

# Flags declaring an extra header search directory, longest first so that
# prefix matching picks `-isystem` before `-I`.
SEARCH_PATH_FLAGS = ("-idirafter", "-isystem", "-iquote", "-I")

# Longer clang spellings that start like a search-path flag but are not one
NOT_SEARCH_PATH_FLAGS = ("-isystem-after",)


def search_path_flag(opt: str) -> Optional[str]:
    """The search-path flag `opt` starts with, or None."""
    if opt.startswith(NOT_SEARCH_PATH_FLAGS):
        return None
    return next((f for f in SEARCH_PATH_FLAGS if opt.startswith(f)), None)


def exact_match(db: FileCompilationDatabase, file_path: str) -> List[NormalizedEntry]:
    """
    Every entry compiled from `file_path`, in database order. Each entry's
    options is one candidate answer. An empty list means "no exact match".
    """
    return [entry for entry in db if entry.file_path == file_path]


def iter_search_paths(options: List[str]) -> Iterator[str]:
    """
    Yields the directory argument of each search-path flag in `options`,
    accepting both `-Idir` and `-I dir`.
    """
    it = iter(options)
    for opt in it:
        flag = search_path_flag(opt)
        if flag is None:
            continue
        path = opt[len(flag):]
        if not path:
            path = next(it, "")
        if path:
            yield path


def absolutize_search_paths(options: List[str], base_directory: str) -> List[str]:
    """Rewrites relative search-path arguments as absolute paths under `base_directory`."""
    result = []
    it = iter(options)
    for opt in it:
        flag = search_path_flag(opt)
        if flag is None:
            result.append(opt)
            continue
        path = opt[len(flag):]
        if path:
            result.append(flag + expand_path(path, base_directory))
            continue
        result.append(opt)
        path = next(it, None)
        if path is not None:
            result.append(expand_path(path, base_directory))
    return result


def _as_directory(path: str) -> str:
    return os.path.join(path, "")


@dataclass(frozen=True)
class DirectoryEntry:
    options: Tuple[str, ...]
    base_directory: str


class DirectoryCompilationDatabase:
    """
    Maps a directory (with trailing separator) to the flags of one file
    compiled in it. Insertion order is kept; the first value seen for a
    directory wins.
    """
    def __init__(self):
        self.entries: Dict[str, DirectoryEntry] = {}

    @classmethod
    def from_file_database(cls, db: FileCompilationDatabase) -> "DirectoryCompilationDatabase":
        ddb = cls()
        for entry in db:
            ddb.add(_as_directory(os.path.dirname(entry.file_path)),
                    DirectoryEntry(tuple(entry.options), entry.base_directory))
        ddb.add_search_path_directories()
        return ddb

    def add(self, directory: str, value: DirectoryEntry) -> bool:
        """Adds `directory` unless it is already known. Returns True if added."""
        if directory in self.entries:
            return False
        self.entries[directory] = value
        return True

    def add_search_path_directories(self):
        """
        Every include directory named by a known directory's flags becomes a
        directory of its own, sharing those flags, unless already present.
        """
        known = set(self.entries)
        for value in list(self.entries.values()):
            for path in iter_search_paths(list(value.options)):
                directory = _as_directory(expand_path(path, value.base_directory))
                if directory not in known:
                    known.add(directory)
                    self.entries[directory] = value

    def lookup(self, file_path: str) -> Optional[Tuple[str, DirectoryEntry]]:
        """
        The entry whose directory is the longest string prefix of `file_path`.
        On equal length the first inserted directory is kept.
        """
        best = None
        for directory, value in self.entries.items():
            if file_path.startswith(directory) and (best is None or len(directory) > len(best[0])):
                best = (directory, value)
        return best

    def __contains__(self, directory: str) -> bool:
        return directory in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def fallback_match(db: FileCompilationDatabase, file_path: str) -> Optional[Tuple[str, DirectoryEntry]]:
    """
    Directory heuristic for a file without an exact entry: the matched
    directory key and its entry, or None when no directory prefixes `file_path`.
    """
    return DirectoryCompilationDatabase.from_file_database(db).lookup(file_path)
