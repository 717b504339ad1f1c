"""DTOs for bootstrap results (per-definition outcome)."""

from dataclasses import dataclass, field

from refcache.domain.exceptions import ReferenceCacheException


@dataclass(frozen=True)
class DefinitionFailure:
    """A definition that could not be populated, with the typed cause."""

    name: str
    error: ReferenceCacheException

    @property
    def error_code(self) -> str:
        return self.error.error_code


@dataclass
class BootstrapResult:
    """Outcome of one bootstrap call for an owner key.

    populated: definitions fetched from the table source in this call.
    skipped: definitions whose namespace was already cached.
    failed: definitions that raised; their namespaces stay absent.
    unpersisted: populated definitions whose write-through to the store failed
        (entities are still in the working copy).
    """

    owner_key: str
    populated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[DefinitionFailure] = field(default_factory=list)
    unpersisted: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when no definition failed."""
        return not self.failed

    @property
    def failed_names(self) -> list[str]:
        return [f.name for f in self.failed]
