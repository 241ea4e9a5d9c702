from typing import List, Optional
from .cdb import CdbError, MalformedDatabaseError, ParseError
from .engine import FlagsEngine


def get_compile_options(queried_file: Optional[str],
                        search_start: Optional[str] = None) -> Optional[List[str]]:
    """
    Flags to parse `queried_file` with, found through the nearest
    compile_commands.json above `search_start` (defaults to the file itself).
    Returns None when no database or no matching entry exists.
    Raises MalformedDatabaseError if the database cannot be parsed.
    """
    if not queried_file:
        return None
    return FlagsEngine().get_compile_options(queried_file, search_start)
