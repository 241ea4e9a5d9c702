import os
from dataclasses import dataclass, field
from typing import Any, List, Optional
from .errors import ParseError
from .tokenizer import split_command_line


@dataclass
class RawCompileCommand:
    """One object of the JSON array, as written by the build system."""
    directory: Optional[str] = None
    file: Optional[str] = None
    command: Optional[str] = None
    arguments: Optional[List[str]] = None

    @classmethod
    def from_json(cls, obj: Any) -> Optional["RawCompileCommand"]:
        """Builds a raw command from a decoded JSON value. Non-objects give None."""
        if not isinstance(obj, dict):
            return None

        def _str(key):
            value = obj.get(key)
            return value if isinstance(value, str) else None

        arguments = obj.get("arguments")
        if not (isinstance(arguments, list) and all(isinstance(a, str) for a in arguments)):
            arguments = None

        return cls(
            directory=_str("directory"),
            file=_str("file"),
            command=_str("command"),
            arguments=arguments,
        )


@dataclass
class NormalizedEntry:
    file_path: str
    options: List[str] = field(default_factory=list)
    base_directory: str = ""


def expand_path(path: str, base: str) -> str:
    """Absolute, normalized form of `path` with relative paths taken from `base`."""
    path = os.path.expanduser(path)
    if not os.path.isabs(path):
        path = os.path.join(os.path.expanduser(base), path)
    return os.path.abspath(path)


def strip_options(args: List[str], file_path: str, directory: str) -> List[str]:
    """
    Removes everything that is not a flag for parsing `file_path`:
    `-c`, `-o <out>`, `-o<out>`, the input file itself and anything after `--`.
    `args` must not contain the compiler name.
    """
    options = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            break
        if arg == "-c":
            i += 1
        elif arg == "-o":
            i += 2
        elif arg.startswith("-o"):
            i += 1
        elif expand_path(arg, directory) == file_path:
            i += 1
        else:
            options.append(arg)
            i += 1
    return options


def normalize(raw: RawCompileCommand) -> Optional[NormalizedEntry]:
    """
    Converts one raw database entry into a NormalizedEntry.
    Returns None when the entry is unusable: missing file/directory,
    unparseable command, or no options left after stripping.
    """
    if not raw.file or not raw.directory:
        return None

    file_path = expand_path(raw.file, raw.directory)

    if raw.command is not None:
        try:
            args = split_command_line(raw.command)
        except ParseError:
            return None
    elif raw.arguments is not None:
        args = list(raw.arguments)
    else:
        return None

    # First token is the compiler executable
    options = strip_options(args[1:], file_path, raw.directory)
    if not options:
        return None

    return NormalizedEntry(file_path=file_path, options=options, base_directory=raw.directory)
