"""
Results -- explicit outcomes of catalog mutations.

A mutation that cannot be applied leaves the catalog unchanged and says
why, instead of returning silently.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from asset_kernel.exceptions import AssetKernelError


class MutationStatus(str, Enum):
    """Status of a mutation."""

    APPLIED = "applied"
    NOT_FOUND = "not_found"  # Target id did not resolve
    LOCKED = "locked"  # Target exists but does not permit this change


@dataclass(frozen=True)
class MutationResult:
    """Result of one store mutation.

    ``target_id`` is the id the mutation addressed, or the newly generated
    id for add-operations.
    """

    status: MutationStatus
    target_id: str | None = None
    error: AssetKernelError | None = None
    message: str | None = None

    @property
    def is_success(self) -> bool:
        return self.status == MutationStatus.APPLIED

    def raise_for_status(self) -> MutationResult:
        """Raise the carried error unless the mutation was applied."""
        if self.error is not None and not self.is_success:
            raise self.error
        return self

    @classmethod
    def applied(cls, target_id: str | None, message: str | None = None) -> MutationResult:
        return cls(status=MutationStatus.APPLIED, target_id=target_id, message=message)

    @classmethod
    def not_found(cls, target_id: str | None, error: AssetKernelError) -> MutationResult:
        return cls(
            status=MutationStatus.NOT_FOUND,
            target_id=target_id,
            error=error,
            message=str(error),
        )

    @classmethod
    def locked(cls, target_id: str | None, error: AssetKernelError) -> MutationResult:
        return cls(
            status=MutationStatus.LOCKED,
            target_id=target_id,
            error=error,
            message=str(error),
        )
