"""Pedigree storage for the relatives of a missing person."""

from __future__ import annotations

from typing import Iterator

from kinship_score.core.models import FamilyMember


class PedigreeStore:
    """
    Mapping of member id to FamilyMember, in insertion order.

    The store trusts the ancestor/descendant edges it is given: acyclicity
    is the responsibility of whoever builds the pedigree.
    """

    def __init__(self, members: list[FamilyMember] | None = None):
        self._members: dict[str, FamilyMember] = {}
        for member in members or []:
            self.add(member)

    def add(self, member: FamilyMember) -> None:
        """Insert or overwrite the entry for member.id."""
        self._members[member.id] = member

    def get(self, member_id: str) -> FamilyMember | None:
        return self._members.get(member_id)

    def all(self) -> list[FamilyMember]:
        """All members, in insertion order."""
        return list(self._members.values())

    def ids(self) -> list[str]:
        return list(self._members)

    def link(self, ancestor_id: str, descendant_id: str) -> None:
        """Record that ancestor_id is a closer relative covering descendant_id."""
        if ancestor_id == descendant_id:
            raise ValueError(f"Member {ancestor_id!r} cannot be linked to itself")
        for member_id in (ancestor_id, descendant_id):
            if member_id not in self._members:
                raise KeyError(f"Member not in pedigree: {member_id}")

        self._members[descendant_id].ancestors.add(ancestor_id)
        self._members[ancestor_id].descendants.add(descendant_id)

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._members

    def __iter__(self) -> Iterator[FamilyMember]:
        return iter(list(self._members.values()))

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        return f"PedigreeStore({len(self._members)} members)"
