"""
Language detection utility: determines the C-family language of a file from
its extension, and whether it is a header (usually absent from the database).
"""
from pathlib import Path
from enum import Enum


class Language(str, Enum):
    C = "c"
    CPP = "cpp"
    OBJC = "objc"
    UNKNOWN = "unknown"


# Extensions that map to each language
_EXT_MAP = {
    ".c": Language.C,
    ".h": Language.C,
    ".cpp": Language.CPP,
    ".cc": Language.CPP,
    ".cxx": Language.CPP,
    ".C": Language.CPP,
    ".hpp": Language.CPP,
    ".hh": Language.CPP,
    ".hxx": Language.CPP,
    ".inl": Language.CPP,
    ".m": Language.OBJC,
    ".mm": Language.OBJC,
}

HEADER_EXTENSIONS = {".h", ".hpp", ".hh", ".hxx", ".inl"}


def detect_language(file_path: str) -> Language:
    """Detect language from file extension."""
    ext = Path(file_path).suffix
    return _EXT_MAP.get(ext, Language.UNKNOWN)


def is_header(file_path: str) -> bool:
    return Path(file_path).suffix in HEADER_EXTENSIONS


def source_label(file_path: str) -> str:
    """Return a human-readable label for the file (used in CLI output)."""
    lang = detect_language(file_path)
    kind = "HEADER" if is_header(file_path) else "SOURCE"
    if lang == Language.C:
        return f"C {kind}"
    if lang == Language.CPP:
        return f"C++ {kind}"
    if lang == Language.OBJC:
        return f"OBJECTIVE-C {kind}"
    return "FILE"
