"""Core models and scoring engine."""

from kinship_score.core.models import (
    CandidateRanking,
    FamilyMember,
    MarkerProfile,
    RelationType,
    SelectionReason,
    SelectionResult,
)
from kinship_score.core.pedigree import PedigreeStore
from kinship_score.core.profiles import ProfileRegistry, ScoringProfile
from kinship_score.core.interpret import StrengthLabel, interpret
from kinship_score.core.engine import KinshipScoreEngine, create_engine
from kinship_score.core.loader import load_pedigree, pedigree_from_dict

__all__ = [
    "CandidateRanking",
    "FamilyMember",
    "MarkerProfile",
    "RelationType",
    "SelectionReason",
    "SelectionResult",
    "PedigreeStore",
    "ProfileRegistry",
    "ScoringProfile",
    "StrengthLabel",
    "interpret",
    "KinshipScoreEngine",
    "create_engine",
    "load_pedigree",
    "pedigree_from_dict",
]
