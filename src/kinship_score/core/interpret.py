"""Qualitative interpretation of a kinship score."""

from __future__ import annotations

from enum import Enum


class StrengthLabel(str, Enum):
    """Expected strength of identification for a total score."""
    STRONG = "Strong"
    FAIR = "Fair"
    LIMITED = "Limited"
    WEAK = "Weak"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    StrengthLabel.STRONG: "Strong - Very high likelihood ratio expected",
    StrengthLabel.FAIR: "Fair - High likelihood ratio expected",
    StrengthLabel.LIMITED: "Limited - Moderate utility, depends on context",
    StrengthLabel.WEAK: "Weak - Low likelihood ratio expected",
}

# Lower bounds (exclusive), strongest first. Same bands for every marker profile.
STRENGTH_BANDS: list[tuple[float, StrengthLabel]] = [
    (20.0, StrengthLabel.STRONG),
    (15.0, StrengthLabel.FAIR),
    (5.0, StrengthLabel.LIMITED),
]


def interpret(total_score: float) -> StrengthLabel:
    """Map a total kinship score to a strength label."""
    for lower_bound, label in STRENGTH_BANDS:
        if total_score > lower_bound:
            return label
    return StrengthLabel.WEAK
