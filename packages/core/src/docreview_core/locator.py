"""Discovery of the connector source files that get reviewed."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

TARGET_DIR = "ballerina"

# Ordered: these are the files of a connector module that carry public API docs.
TARGET_FILE_NAMES: tuple[str, ...] = (
    "client.bal",
    "types.bal",
    "listener.bal",
    "caller.bal",
    "service.bal",
)


def find_target_files(
    repo_root: str | os.PathLike,
    target_dir: str = TARGET_DIR,
    target_names: tuple[str, ...] | list[str] = TARGET_FILE_NAMES,
) -> list[str]:
    """Return absolute paths of every target file under ``<repo_root>/<target_dir>``.

    A missing target directory yields an empty list. Directories are walked
    depth-first with an explicit stack, entries in lexical order, so the result
    is the same on every run over an unchanged tree. The same file name in two
    directories is listed twice. Symlinked directories are not followed.

    Any OSError while listing a directory propagates: a partial list would
    silently under-review the repository.
    """
    root = os.path.join(os.path.abspath(repo_root), target_dir)
    if not os.path.isdir(root):
        logger.debug("No %s/ directory under %s; nothing to review.", target_dir, repo_root)
        return []

    wanted = set(target_names)
    found: list[str] = []
    stack = [root]
    while stack:
        current = stack.pop()
        with os.scandir(current) as it:
            entries = sorted(it, key=lambda e: e.name)

        subdirs = []
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                subdirs.append(entry.path)
            elif entry.is_file() and entry.name in wanted:
                found.append(entry.path)

        # Reversed so the lexically first subdirectory is popped first.
        stack.extend(reversed(subdirs))

    logger.debug("Found %d target file(s) under %s", len(found), root)
    return found
