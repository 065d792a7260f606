from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class PersistenceError(Exception):
    """A fetch or write against a persistence collaborator failed.

    Always recoverable: the caller keeps its previous state and may retry.
    """

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        self.detail = detail
        message = operation if not detail else f"{operation}: {detail}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class MutationResult:
    """Outcome of a ledger mutation.

    ``skipped`` is set when no user identity was available; the ledger is left
    untouched and no error is reported.
    """

    ok: bool
    skipped: bool = False
    error: Optional[PersistenceError] = None

    @classmethod
    def success(cls) -> "MutationResult":
        return cls(ok=True)

    @classmethod
    def no_identity(cls) -> "MutationResult":
        return cls(ok=True, skipped=True)

    @classmethod
    def failure(cls, error: PersistenceError) -> "MutationResult":
        return cls(ok=False, error=error)
