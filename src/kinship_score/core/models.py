"""
Core data models for kinship scoring.

These models describe:
- Relationship categories relative to the missing person
- STR marker panel profiles
- Family members and their ancestor/descendant edges
- Selection outcomes returned by the scoring engine
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class RelationType(str, Enum):
    """Relationship of a family member to the missing person."""
    PARENT = "parent"
    SIBLING = "sibling"
    CHILD = "child"
    UNCLE_AUNT = "uncle_aunt"
    NEPHEW_NIECE = "nephew_niece"
    HALF_SIBLING = "half_sibling"
    GRANDCHILD = "grandchild"
    GRANDPARENT = "grandparent"
    COUSIN = "cousin"
    NONE = "none"


# Alternate spellings accepted in pedigree files (compared lowercased)
RELATION_ALIASES = {
    "uncleaunt": RelationType.UNCLE_AUNT,
    "uncle": RelationType.UNCLE_AUNT,
    "aunt": RelationType.UNCLE_AUNT,
    "nephewniece": RelationType.NEPHEW_NIECE,
    "nephew": RelationType.NEPHEW_NIECE,
    "niece": RelationType.NEPHEW_NIECE,
    "halfsibling": RelationType.HALF_SIBLING,
}


class MarkerProfile(str, Enum):
    """STR marker panel used for the reference samples."""
    STR_15 = "15"
    STR_22 = "22"

    @classmethod
    def _missing_(cls, value):
        # Accept 15 / 22 given as integers
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.__members__.get(f"STR_{value}")
        return None

    @property
    def markers(self) -> int:
        return int(self.value)


class SelectionReason(str, Enum):
    """Outcome of a selection attempt."""
    OK = "ok"
    UNKNOWN_MEMBER = "unknown_member"
    ALREADY_SELECTED = "already_selected"
    SATURATED = "saturated"
    REDUNDANT = "redundant"


class FamilyMember(BaseModel):
    """
    A relative of the missing person who may be sampled.

    `ancestors` lists closer relatives whose selection makes this member
    redundant (a grandchild's ancestor is its parent). `descendants` is the
    inverse edge and is informational only.
    """
    id: str = Field(frozen=True, min_length=1)
    relation: RelationType = Field(frozen=True)
    label: str | None = None
    ancestors: set[str] = Field(default_factory=set)
    descendants: set[str] = Field(default_factory=set)

    # Owned by the scoring engine
    selected: bool = False
    redundant: bool = False

    @field_validator("relation", mode="before")
    @classmethod
    def validate_relation(cls, v):
        """Accept relation names case-insensitively, in snake_case or camelCase."""
        if isinstance(v, str) and not isinstance(v, RelationType):
            name = v.strip().lower().replace("-", "_")
            return RELATION_ALIASES.get(name, name)
        return v

    @model_validator(mode="after")
    def validate_no_self_edges(self) -> FamilyMember:
        if self.id in self.ancestors:
            raise ValueError(f"Member {self.id!r} cannot be its own ancestor")
        if self.id in self.descendants:
            raise ValueError(f"Member {self.id!r} cannot be its own descendant")
        return self

    def display_name(self) -> str:
        return self.label or self.id


@dataclass(frozen=True)
class SelectionResult:
    """Result of selecting (or previewing) a family member."""
    member_id: str
    contribution: float
    reason: SelectionReason
    total_score: float
    message: str | None = None

    @property
    def accepted(self) -> bool:
        return self.reason is SelectionReason.OK


@dataclass
class CandidateRanking:
    """Expected value of sampling a not-yet-selected member next."""
    member_id: str
    relation: RelationType
    expected_contribution: float
    reason: SelectionReason
    message: str | None = None
