"""
Kinship Score

Estimates the identification power of family reference samples for a
missing person, to help prioritize which relatives to sample.
"""

__version__ = "0.1.0"

from kinship_score.core.models import (
    FamilyMember,
    MarkerProfile,
    RelationType,
    SelectionReason,
    SelectionResult,
)
from kinship_score.core.pedigree import PedigreeStore
from kinship_score.core.engine import KinshipScoreEngine
from kinship_score.core.interpret import StrengthLabel, interpret

__all__ = [
    "FamilyMember",
    "MarkerProfile",
    "RelationType",
    "SelectionReason",
    "SelectionResult",
    "PedigreeStore",
    "KinshipScoreEngine",
    "StrengthLabel",
    "interpret",
]
