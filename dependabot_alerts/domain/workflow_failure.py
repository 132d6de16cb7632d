"""Domain entities for Dependabot workflow failures."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

UNKNOWN_WORKFLOW_NAME = "Unknown"


@dataclass(frozen=True)
class RepositoryIdentity:
    """Immutable owner/name pair identifying a repository."""

    owner: str
    name: str

    @classmethod
    def from_slug(cls, slug: str) -> "RepositoryIdentity":
        """
        Build an identity from an ``owner/name`` slug.

        Args:
            slug: Repository slug, e.g. the value of GITHUB_REPOSITORY

        Raises:
            ValueError: If the slug is not of the form ``owner/name``
        """
        parts = slug.split("/") if slug else []
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Invalid repository slug: \"{slug}\" - expected owner/name")
        return cls(owner=parts[0], name=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class FailureRecord:
    """Immutable failed workflow run entity."""

    id: int
    name: str
    html_url: str
    created_at: str

    @classmethod
    def from_workflow_run(cls, run: Dict[str, Any]) -> "FailureRecord":
        """Create a record from a raw workflow run returned by the GitHub API."""
        name = run.get("name")
        return cls(
            id=run["id"],
            name=name if name is not None else UNKNOWN_WORKFLOW_NAME,
            html_url=run["html_url"],
            created_at=run["created_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "html_url": self.html_url,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class CheckResult:
    """Failed Dependabot runs for one repository, in the order GitHub returned them."""

    failures: Tuple[FailureRecord, ...] = ()

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def has_failures(self) -> bool:
        return self.failure_count > 0
