from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import StorageKey
from ..meetings.model import Meeting
from ..overrides.store import OverrideStore
from ..storage.repository import KeyValueStore
from .model import CommitteeAssignment, normalize_committees

LOGGER = logging.getLogger("governance_tracker.committees")


def get_assigned_committees(pid: str, assignments: Iterable[CommitteeAssignment]) -> List[str]:
    wanted = str(pid)
    for assignment in assignments:
        if str(assignment.pid) == wanted:
            return list(assignment.committees)
    return []


def _serialize(assignments: Sequence[CommitteeAssignment]) -> list:
    return [a.to_dict() for a in assignments]


def _deserialize(raw) -> List[CommitteeAssignment]:
    if not isinstance(raw, list):
        raise ValueError("assignments override must be a list")
    return [CommitteeAssignment.from_dict(r) for r in raw]


class AssignmentService:
    """Use case: read and edit senator committee assignments.

    Every edit persists the full list as the assignments override.
    """

    def __init__(self, store: KeyValueStore, loader, *, allowed_committees: Optional[Sequence[str]] = None):
        self._overrides: OverrideStore[List[CommitteeAssignment]] = OverrideStore(
            store, StorageKey.ASSIGNMENTS_OVERRIDE, serialize=_serialize, deserialize=_deserialize
        )
        self._loader = loader
        self._allowed = allowed_committees

    @property
    def overrides(self) -> OverrideStore[List[CommitteeAssignment]]:
        return self._overrides

    def list_assignments(self) -> List[CommitteeAssignment]:
        return list(self._overrides.read_lazy(self._loader.load_assignments))

    def committees_for(self, pid: str) -> List[str]:
        return get_assigned_committees(pid, self.list_assignments())

    def add_assignment(self, pid: str, committee: str) -> List[CommitteeAssignment]:
        pid = require_non_empty(pid, "PID")
        committee = require_non_empty(committee, "Committee")

        assignments = self.list_assignments()
        for i, assignment in enumerate(assignments):
            if str(assignment.pid) == pid:
                if not assignment.has(committee):
                    committees = tuple(sorted(assignment.committees + (committee,)))
                    assignments[i] = CommitteeAssignment(pid=assignment.pid, committees=committees)
                break
        else:
            assignments.append(CommitteeAssignment(pid=pid, committees=(committee,)))

        self._overrides.write(assignments)
        LOGGER.info("Assigned %s to %s", pid, committee)
        return assignments

    def remove_assignment(self, pid: str, committee: str) -> List[CommitteeAssignment]:
        pid = require_non_empty(pid, "PID")
        committee = require_non_empty(committee, "Committee")

        assignments = self.list_assignments()
        for i, assignment in enumerate(assignments):
            if str(assignment.pid) != pid:
                continue
            remaining = tuple(c for c in assignment.committees if c != committee)
            if remaining:
                assignments[i] = CommitteeAssignment(pid=assignment.pid, committees=remaining)
            else:
                del assignments[i]
            self._overrides.write(assignments)
            LOGGER.info("Removed %s from %s", pid, committee)
            return assignments
        return assignments

    def allowed_committees(self) -> List[str]:
        if self._allowed is None:
            self._allowed = self._loader.load_committees()
        return list(self._allowed)

    def known_committees(self, meetings: Iterable[Meeting]) -> List[str]:
        """Suggestions for the editor: meeting committees plus the allowed list."""
        names = normalize_committees([m.committee for m in meetings] + self.allowed_committees())
        return sorted(names)
