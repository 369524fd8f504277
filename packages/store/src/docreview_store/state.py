"""StateStore — per-repository review history in a hidden JSON file.

Why a flat JSON file at the repository root:
- It travels with the repository, so CI jobs and local runs share one history.
- The schema is tiny (a checksum and a timestamp per file), so a full parse on
  every run costs nothing and the file diffs cleanly in version control.

Files are keyed by their path relative to the repository root, with "/"
separators, so a fresh clone at any location reuses the recorded history.

The store is read once at the start of an incremental run and written at most
once at the end. A single run is assumed to own the file; there is no locking.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from docreview_store.checksum import fingerprint_file
from docreview_store.errors import StateFormatError
from docreview_store.fileio import atomic_write_text
from docreview_store.models import FileReviewInfo, ReviewState

logger = logging.getLogger(__name__)

STATE_FILENAME = ".docreview-state.json"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class StateStore:
    """Loads and saves the ReviewState of one repository.

    The state file lives at ``<repo_root>/.docreview-state.json``.
    """

    def __init__(self, repo_root: str | os.PathLike):
        self.repo_root = Path(repo_root)
        self.path = self.repo_root / STATE_FILENAME

    def load(self) -> ReviewState:
        """Return the stored state, or an empty state if no file exists yet.

        Raises StateFormatError if the file is present but malformed, and
        OSError if it cannot be read.
        """
        if not self.path.exists():
            logger.debug("No state file at %s; starting with empty history.", self.path)
            return ReviewState()

        raw = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StateFormatError(f"{self.path} is not valid JSON: {e}") from e
        return ReviewState.from_dict(data)

    def save(self, state: ReviewState) -> None:
        """Atomically replace the state file with ``state``.

        The document is serialized before anything is written, so an
        unserializable state never touches disk. On failure the previous file
        is left untouched.
        """
        content = json.dumps(state.to_dict(), indent=2) + "\n"
        atomic_write_text(self.path, content)
        logger.debug("Saved review state with %d file(s) to %s", len(state.reviewed_files), self.path)


def state_key(file_path: str | os.PathLike, repo_root: str | os.PathLike) -> str:
    """Return the key ``file_path`` is recorded under: repo-relative, POSIX separators.

    Paths outside ``repo_root`` keep their absolute form.
    """
    root = os.path.abspath(repo_root)
    path = os.path.abspath(file_path)
    if os.path.commonpath([root, path]) != root:
        return Path(path).as_posix()
    return Path(os.path.relpath(path, root)).as_posix()


def mark_reviewed(
    state: ReviewState, file_path: str, now: str | None = None, key: str | None = None
) -> ReviewState:
    """Record a fresh fingerprint for ``file_path`` and return the same state.

    The entry is stored under ``key`` (see state_key), defaulting to
    ``file_path`` itself. The file is always re-read, since it has usually
    just been overwritten by the rewrite step. Raises OSError if it cannot be
    read.
    """
    checksum = fingerprint_file(file_path)
    state.reviewed_files[key or file_path] = FileReviewInfo(checksum=checksum, last_reviewed=now or _utc_now())
    return state


def has_changed(file_path: str, state: ReviewState, key: str | None = None) -> bool:
    """Return True if the file is new to the history or its content changed.

    Pure with respect to ``state``: nothing is recorded here.
    """
    current = fingerprint_file(file_path)
    info = state.reviewed_files.get(key or file_path)
    if info is None:
        return True
    return info.checksum != current
