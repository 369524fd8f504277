from __future__ import annotations


class StateFormatError(ValueError):
    """The review state file exists but is not valid JSON or does not match the schema.

    Callers treat this as fatal for the run rather than discarding history.
    """
