"""Data models for parsed Gradle dependency reports."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


@dataclass
class DependencyRecord:
    """A single resolved Maven coordinate read from a dependency report.

    ``resolved_version`` is the conflict-resolved version when the report
    line carried an arrow (``1.0.3 -> 1.1.1``), otherwise the declared one.
    """

    group_id: str
    artifact_id: str
    declared_version: str
    resolved_version: str = ""

    def __post_init__(self) -> None:
        """Validate and normalize the record."""
        if not self.group_id or not self.artifact_id:
            raise ValueError("Dependency group and artifact cannot be empty")
        if not self.declared_version:
            raise ValueError("Dependency version cannot be empty")

        if not self.resolved_version:
            self.resolved_version = self.declared_version

    @property
    def name(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def key(self) -> Tuple[str, str]:
        """Identity used for deduplication."""
        return (self.name, self.resolved_version)

    @property
    def was_replaced(self) -> bool:
        return self.resolved_version != self.declared_version

    def to_package(self) -> Dict[str, str]:
        """Package descriptor in the shape the analysis service expects."""
        return {"name": self.name, "version": self.resolved_version}

    def __hash__(self) -> int:
        """Hash based on coordinate and resolved version."""
        return hash(self.key)

    def __eq__(self, other: Any) -> bool:
        """Equality based on coordinate and resolved version."""
        if not isinstance(other, DependencyRecord):
            return False
        return self.key == other.key


@dataclass(frozen=True)
class ModuleRef:
    """A Gradle sub-project, addressed by its colon-prefixed path."""

    path: str

    def __post_init__(self) -> None:
        if not self.path.startswith(":"):
            raise ValueError(f"Module path must start with ':': {self.path!r}")

    def task(self, name: str) -> str:
        """Fully qualified task name, e.g. ``:sub1:dependencies``."""
        return f"{self.path}:{name}"

    def project_name(self, root_project: str) -> str:
        """Analysis project name: ``myapp`` and ``:sub1`` give ``myapp/sub1``."""
        return f"{root_project}/{self.path[1:]}"

    def __str__(self) -> str:
        return self.path


@dataclass
class ModuleDependencySet:
    """Deduplicated dependencies reported for one module.

    Records are keyed by ``(group:artifact, resolved_version)``; adding a
    record whose key is already present is a no-op.
    """

    module: Optional[ModuleRef] = None
    section: str = ""
    _records: Dict[Tuple[str, str], DependencyRecord] = field(default_factory=dict, repr=False)

    def add_dependency(self, record: DependencyRecord) -> bool:
        """Add a record unless an identical one was already seen.

        Args:
            record: Record to add

        Returns:
            True if the record was new
        """
        if record.key in self._records:
            return False
        self._records[record.key] = record
        return True

    def update(self, records: Iterable[DependencyRecord]) -> None:
        for record in records:
            self.add_dependency(record)

    @property
    def dependencies(self) -> List[DependencyRecord]:
        return list(self._records.values())

    def to_packages(self) -> List[Dict[str, str]]:
        return [record.to_package() for record in self._records.values()]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DependencyRecord]:
        return iter(self._records.values())

    def __contains__(self, record: object) -> bool:
        return isinstance(record, DependencyRecord) and record.key in self._records
