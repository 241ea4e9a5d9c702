from .errors import CdbError, ParseError, MalformedDatabaseError
from .tokenizer import split_command_line
from .normalizer import RawCompileCommand, NormalizedEntry, normalize, strip_options, expand_path
from .loader import FileCompilationDatabase, load_database, parse_database
from .locator import DATABASE_NAME, find_compile_commands, find_registered_database, locate_database
from .resolver import (
    DirectoryCompilationDatabase,
    DirectoryEntry,
    absolutize_search_paths,
    exact_match,
    fallback_match,
    iter_search_paths,
    search_path_flag,
)
