"""Priority filter — decide which repository files are worth summarising.

The tree walker (inline, during traversal) and the aggregation pipeline
(post-hoc, over a full listing) both go through :func:`is_priority`, so
there is exactly one definition of what counts as a priority file.
"""

from __future__ import annotations

from typing import Iterable

# Matched against the end of the path, case-sensitive.
PRIORITY_FILES: tuple[str, ...] = (
    "README.md",
    "project_description.txt",
    "overview.md",
    "SUMMARY.md",
    "main.py",
    "index.js",
    "setup.py",
    "package.json",
    "pubspec.yaml",
    "requirements.txt",
    ".project",
)

# Matched against the start of the path.
PRIORITY_FOLDERS: tuple[str, ...] = (
    "docs/",
)


def is_priority(path: str) -> bool:
    """Return *True* if *path* names a priority file or lives in a priority folder."""
    return path.endswith(PRIORITY_FILES) or path.startswith(PRIORITY_FOLDERS)


def filter_priority(paths: Iterable[str]) -> list[str]:
    """Keep only priority paths, preserving their order."""
    return [path for path in paths if is_priority(path)]
