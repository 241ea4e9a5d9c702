import os
import time
from typing import List, Optional
from .cdb import (
    MalformedDatabaseError,
    exact_match,
    fallback_match,
    load_database,
    locate_database,
)
from .utils.config import ConfigManager
from .utils.lang import is_header
from .utils.state import MATCH_DIRECTORY, MATCH_EXACT, QueryState


class FlagsEngine:
    """
    Answers "which compiler flags parse this file?" from the nearest
    compile_commands.json. Nothing is cached: every query re-reads the database.
    """
    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config = config_manager if config_manager else ConfigManager()
        self.log_file = self.config.log_path
        # First failure to write the log, for the CLI to report
        self.log_error: Optional[str] = None

    def _log(self, msg: str):
        try:
            with open(self.log_file, "a") as f:
                f.write(f"[{time.time()}] {msg}\n")
        except OSError as e:
            if self.log_error is None:
                self.log_error = f"Cannot write log file {self.log_file}: {e}"

    def _projects(self) -> dict:
        projects = self.config.get("projects")
        if not isinstance(projects, dict):
            self._log(f"Ignoring non-mapping 'projects' setting: {projects!r}")
            return {}
        return projects

    def query(self, queried_file: Optional[str], search_start: Optional[str] = None) -> QueryState:
        state = QueryState()
        if not queried_file:
            return state

        state.queried_path = os.path.abspath(os.path.expanduser(queried_file))
        state.search_start = search_start or state.queried_path
        self._log(f"Query {state.queried_path} (search from {state.search_start})")

        db_path = locate_database(
            state.queried_path,
            state.search_start,
            projects=self._projects(),
            db_name=self.config.get("database_name", "compile_commands.json"),
        )
        if db_path is None:
            self._log("No compilation database found")
            return state
        state.database_path = str(db_path)

        try:
            db = load_database(db_path)
        except MalformedDatabaseError as e:
            self._log(f"Load Error: {e}")
            raise

        state.loaded_entries = len(db)
        state.dropped_entries = db.dropped
        self._log(f"Loaded {len(db)} entries from {db_path} ({db.dropped} dropped)")

        entries = exact_match(db, state.queried_path)
        if entries:
            state.set_result(MATCH_EXACT,
                             [e.options for e in entries],
                             [e.base_directory for e in entries])
            self._log(f"Exact match: {len(entries)} candidate(s)")
            return state

        if not self.config.get("fallback", True):
            self._log("No exact match, directory fallback disabled")
            return state

        found = fallback_match(db, state.queried_path)
        if found is None:
            self._log("No known directory prefixes the file")
            return state

        directory, value = found
        state.set_result(MATCH_DIRECTORY, [list(value.options)], [value.base_directory])
        state.matched_directory = directory
        kind = "header" if is_header(state.queried_path) else "file"
        self._log(f"Directory fallback for {kind}: {directory}")
        return state

    def get_compile_options(self, queried_file: Optional[str],
                            search_start: Optional[str] = None) -> Optional[List[str]]:
        return self.query(queried_file, search_start).options
