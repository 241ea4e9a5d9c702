import shlex
from typing import List
from .errors import ParseError


def split_command_line(command: str) -> List[str]:
    """
    Splits a shell-style command string into argument tokens.
    Handles single quotes, double quotes and backslash escapes the way a
    POSIX shell would. Example:
        'gcc -DNAME="a b" x.c' -> ['gcc', '-DNAME=a b', 'x.c']
    """
    if not command or not command.strip():
        return []

    try:
        return shlex.split(command, posix=True)
    except ValueError as e:
        # shlex reports "No closing quotation" / "No escaped character"
        raise ParseError(command, str(e)) from e
