import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Union
from .errors import MalformedDatabaseError
from .normalizer import NormalizedEntry, RawCompileCommand, normalize


@dataclass
class FileCompilationDatabase:
    """
    Normalized entries in the order they appear in the JSON array.
    `dropped` counts raw entries that could not be normalized.
    """
    path: str = ""
    entries: List[NormalizedEntry] = field(default_factory=list)
    dropped: int = 0

    def __iter__(self) -> Iterator[NormalizedEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def parse_database(text: str, db_path: str = "<string>") -> FileCompilationDatabase:
    """Builds a FileCompilationDatabase from the JSON text of a database file."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDatabaseError(db_path, f"invalid JSON ({e})") from e

    if not isinstance(data, list):
        raise MalformedDatabaseError(db_path, "top-level value is not an array")

    db = FileCompilationDatabase(path=db_path)
    for item in data:
        raw = RawCompileCommand.from_json(item)
        entry = normalize(raw) if raw else None
        if entry is None:
            db.dropped += 1
        else:
            db.entries.append(entry)
    return db


def load_database(db_path: Union[str, Path]) -> FileCompilationDatabase:
    """
    Reads and normalizes a compile_commands.json file.
    Raises MalformedDatabaseError if the file cannot be read or parsed.
    """
    try:
        with open(db_path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDatabaseError(str(db_path), str(e)) from e

    return parse_database(text, str(db_path))
