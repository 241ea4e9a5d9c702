from dataclasses import dataclass, field
from typing import List, Optional

MATCH_EXACT = "exact"
MATCH_DIRECTORY = "directory"


@dataclass
class QueryState:
    """
    Outcome of one flags query. `candidates[i]` runs in `working_dirs[i]`.
    """
    queried_path: str = ""
    search_start: str = ""
    database_path: Optional[str] = None

    candidates: List[List[str]] = field(default_factory=list)
    working_dirs: List[str] = field(default_factory=list)
    match_kind: Optional[str] = None
    matched_directory: Optional[str] = None

    # Database statistics
    loaded_entries: int = 0
    dropped_entries: int = 0

    @property
    def has_flags(self) -> bool:
        return bool(self.candidates)

    @property
    def options(self) -> Optional[List[str]]:
        """First candidate, the conventional choice among duplicates."""
        return self.candidates[0] if self.candidates else None

    @property
    def working_dir(self) -> Optional[str]:
        return self.working_dirs[0] if self.working_dirs else None

    def set_result(self, kind: str, candidates: List[List[str]], working_dirs: List[str]):
        self.match_kind = kind
        self.candidates = candidates
        self.working_dirs = working_dirs
