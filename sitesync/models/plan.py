"""
Reconciliation plan produced by the diff step
"""
from typing import FrozenSet


class ReconciliationPlan:
    """Keys to upload and keys to delete for one apply.

    ``to_put`` holds every desired key, including the ones whose
    fingerprint did not change; ``unchanged`` lists those for display
    only. ``to_put`` and ``to_delete`` never share a key.
    """

    def __init__(self, to_put=frozenset(), to_delete=frozenset(), unchanged=frozenset()):
        self.to_put: FrozenSet[str] = frozenset(to_put)
        self.to_delete: FrozenSet[str] = frozenset(to_delete)
        self.unchanged: FrozenSet[str] = frozenset(unchanged)

    @property
    def changed(self) -> FrozenSet[str]:
        """Keys that are new or whose content differs from the previous state."""
        return self.to_put - self.unchanged

    def is_empty(self) -> bool:
        return not self.to_put and not self.to_delete

    def __eq__(self, other):
        if not isinstance(other, ReconciliationPlan):
            return NotImplemented
        return (self.to_put, self.to_delete) == (other.to_put, other.to_delete)

    def __repr__(self):
        return (
            f"ReconciliationPlan(to_put={sorted(self.to_put)!r}, "
            f"to_delete={sorted(self.to_delete)!r})"
        )
