"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from code_summarizer.domain.exceptions import InvalidArgumentError

_NAME_RE = re.compile(r"^[A-Za-z0-9\-_.]+$")


def validate_repo_path(path: str) -> str:
    """Reject paths with ``.`` or ``..`` segments; they would escape the contents endpoint."""
    if any(segment in (".", "..") for segment in path.split("/")):
        raise InvalidArgumentError(f"Invalid repository path: '{path}'.")
    return path


@dataclass(frozen=True, slots=True)
class RepositoryCoordinate:
    """Identifies a remote repository as ``owner/repo``.

    Rejects blank names and names containing characters GitHub does not
    allow, so that nothing malformed ever reaches the host API.
    """

    owner: str
    repo: str

    @classmethod
    def from_parts(cls, owner: str | None, repo: str | None) -> RepositoryCoordinate:
        """Strip and validate raw owner / repo strings."""
        owner = (owner or "").strip()
        repo = (repo or "").strip()
        if not owner or not repo:
            raise InvalidArgumentError("Repository owner and name are required.")
        for value in (owner, repo):
            if not _NAME_RE.match(value) or value in (".", ".."):
                raise InvalidArgumentError(f"Invalid repository name component: '{value}'.")
        return cls(owner=owner, repo=repo)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
