class CdbError(Exception):
    """Base class for compilation database failures."""


class ParseError(CdbError):
    """
    Raised when a compile command string cannot be split into arguments
    (unbalanced quotes, dangling backslash).
    """
    def __init__(self, command: str, reason: str):
        super().__init__(f"Cannot parse command line ({reason}): {command}")
        self.command = command
        self.reason = reason


class MalformedDatabaseError(CdbError):
    """
    Raised when the database file itself is unusable: unreadable, not JSON,
    or not a top-level array. Aborts the whole query.
    """
    def __init__(self, db_path: str, reason: str):
        super().__init__(f"Malformed compilation database {db_path}: {reason}")
        self.db_path = db_path
        self.reason = reason
