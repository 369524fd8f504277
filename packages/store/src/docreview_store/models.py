"""Review state data models.

Decoupled from docreview_core so the state layer can be used independently
and docreview_core has no knowledge of the on-disk JSON schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from docreview_store.errors import StateFormatError


@dataclass
class FileReviewInfo:
    """Fingerprint of one file at its last successful review."""

    checksum: str  # lowercase hex SHA-256
    last_reviewed: str  # ISO-8601 UTC timestamp

    def to_dict(self) -> dict:
        return {"checksum": self.checksum, "lastReviewed": self.last_reviewed}

    @classmethod
    def from_dict(cls, path: str, d) -> FileReviewInfo:
        if not isinstance(d, dict):
            raise StateFormatError(f"Entry for {path!r} must be an object, got {type(d).__name__}.")
        checksum = d.get("checksum")
        last_reviewed = d.get("lastReviewed", "")
        if not isinstance(checksum, str) or not isinstance(last_reviewed, str):
            raise StateFormatError(f"Entry for {path!r} needs string 'checksum' and 'lastReviewed' fields.")
        return cls(checksum=checksum, last_reviewed=last_reviewed)


@dataclass
class ReviewState:
    """Per-repository review history persisted as a single JSON document.

    Created empty when no state file exists. Every key in reviewed_files is a
    file that was rewritten and fingerprinted at least once; files that were
    never reviewed are simply absent.
    """

    last_reviewed_commit: str = ""
    last_review_timestamp: str = ""
    reviewed_files: dict[str, FileReviewInfo] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "lastReviewedCommit": self.last_reviewed_commit,
            "lastReviewTimestamp": self.last_review_timestamp,
            "reviewedFiles": {path: info.to_dict() for path, info in sorted(self.reviewed_files.items())},
        }

    @classmethod
    def from_dict(cls, d) -> ReviewState:
        if not isinstance(d, dict):
            raise StateFormatError(f"State document must be a JSON object, got {type(d).__name__}.")
        commit = d.get("lastReviewedCommit", "")
        timestamp = d.get("lastReviewTimestamp", "")
        files = d.get("reviewedFiles", {})
        if not isinstance(commit, str) or not isinstance(timestamp, str):
            raise StateFormatError("'lastReviewedCommit' and 'lastReviewTimestamp' must be strings.")
        # null is accepted for an empty map.
        if files is None:
            files = {}
        if not isinstance(files, dict):
            raise StateFormatError("'reviewedFiles' must be an object.")
        return cls(
            last_reviewed_commit=commit,
            last_review_timestamp=timestamp,
            reviewed_files={path: FileReviewInfo.from_dict(path, info) for path, info in files.items()},
        )
