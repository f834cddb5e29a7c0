"""
Kinship score engine.

Estimates the identification power obtainable from a set of selected
reference relatives. Implements three rules on top of the base score table:

1. Saturation: once the total reaches the profile's threshold, further
   selections contribute nothing
2. Redundancy: a relative covered by an already selected closer relative,
   or a fourth-or-later sibling, contributes nothing
3. Diminishing returns: the k-th member of a relation type contributes
   base / k
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

from kinship_score.core.interpret import StrengthLabel, interpret
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

logger = logging.getLogger(__name__)

SATURATED_MESSAGE = "Maximum useful score reached - additional samples won't improve results"
REDUNDANT_MESSAGE = "This member is already represented through closer relatives"


class KinshipScoreEngine:
    """
    Scoring session over one pedigree.

    Not thread-safe: run independent sessions on independent engines.
    """

    MAX_SELECTED_SIBLINGS = 3

    def __init__(
        self,
        profile: MarkerProfile | int | str = MarkerProfile.STR_22,
        pedigree: PedigreeStore | None = None,
        registry: ProfileRegistry | None = None,
    ):
        self.profile = MarkerProfile(profile)

        registry = registry or ProfileRegistry()
        scoring = registry.get_profile(self.profile)
        if scoring is None:
            raise ValueError(f"No score table for {self.profile.markers}-marker profile")
        self._scoring: ScoringProfile = scoring

        self.pedigree = pedigree if pedigree is not None else PedigreeStore()
        self.total_score = 0.0
        self._selected_ids: set[str] = set()
        self.history: list[SelectionResult] = []

        # Flags from a prebuilt pedigree do not carry into a new session
        for member in self.pedigree.all():
            member.selected = False
            member.redundant = False

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def saturation_threshold(self) -> float:
        return self._scoring.saturation_threshold

    @property
    def base_scores(self) -> dict[RelationType, float]:
        return dict(self._scoring.base_scores)

    def base_score(self, relation: RelationType) -> float:
        return self._scoring.base_score(relation)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def selected_ids(self) -> set[str]:
        return set(self._selected_ids)

    @property
    def is_saturated(self) -> bool:
        return self.total_score >= self.saturation_threshold

    def add_to_pedigree(self, member: FamilyMember) -> None:
        """
        Register a relative. May be called mid-session.

        Replacing an already selected member keeps it selected; its relation
        cannot change, since its contribution was scored under it.
        """
        existing = self.pedigree.get(member.id)
        if member.id in self._selected_ids:
            if existing is not None and existing.relation is not member.relation:
                raise ValueError(
                    f"Cannot change relation of selected member {member.id!r} "
                    f"from {existing.relation.value} to {member.relation.value}"
                )
            member.selected = True
            member.redundant = False
        else:
            member.selected = False
            member.redundant = self._is_redundant(member)
        self.pedigree.add(member)

    def select(self, member_id: str) -> SelectionResult:
        """
        Select a member as a reference sample.

        Returns the marginal contribution, or 0.0 with the reason the
        selection was rejected. Rejections leave the score untouched.
        """
        result = self._evaluate(member_id)

        if result.reason is SelectionReason.REDUNDANT:
            self.pedigree.get(member_id).redundant = True
        elif result.accepted:
            member = self.pedigree.get(member_id)
            member.selected = True
            member.redundant = False
            self._selected_ids.add(member_id)
            self.total_score += result.contribution
            result = replace(result, total_score=self.total_score)
            self._update_redundancy()

        if result.accepted:
            logger.info(
                "Selected %s (%s): +%.3f, total %.3f",
                member_id, self.pedigree.get(member_id).relation.value,
                result.contribution, self.total_score,
            )
        else:
            logger.info("Selection of %s rejected: %s", member_id, result.reason.value)

        self.history.append(result)
        return result

    def preview(self, member_id: str) -> SelectionResult:
        """The result select() would return, without changing any state."""
        return self._evaluate(member_id)

    def rank_candidates(self) -> list[CandidateRanking]:
        """
        Rank unselected members by what sampling them next would add.

        Ties keep pedigree insertion order.
        """
        rankings = []
        for member in self.pedigree.all():
            if member.selected:
                continue
            result = self._evaluate(member.id)
            rankings.append(CandidateRanking(
                member_id=member.id,
                relation=member.relation,
                expected_contribution=result.contribution,
                reason=result.reason,
                message=result.message,
            ))

        rankings.sort(key=lambda r: r.expected_contribution, reverse=True)
        return rankings

    def reset(self) -> None:
        """Clear all selections. Pedigree membership is kept."""
        self.total_score = 0.0
        self._selected_ids.clear()
        self.history.clear()
        for member in self.pedigree.all():
            member.selected = False
            member.redundant = False
        logger.debug("Scoring session reset (%d members kept)", len(self.pedigree))

    def get_interpretation(self) -> StrengthLabel:
        return interpret(self.total_score)

    # -------------------------------------------------------------------------
    # Rules
    # -------------------------------------------------------------------------

    def _evaluate(self, member_id: str) -> SelectionResult:
        """Apply the selection checks in order, without mutating state."""
        member = self.pedigree.get(member_id)
        if member is None:
            return self._rejected(member_id, SelectionReason.UNKNOWN_MEMBER)

        if member.selected or member_id in self._selected_ids:
            return self._rejected(member_id, SelectionReason.ALREADY_SELECTED)

        # Checked before adding: one contribution may push the total past it
        if self.is_saturated:
            return self._rejected(member_id, SelectionReason.SATURATED, SATURATED_MESSAGE)

        if self._is_redundant(member):
            return self._rejected(member_id, SelectionReason.REDUNDANT, REDUNDANT_MESSAGE)

        contribution = self._calculate_contribution(member)
        return SelectionResult(
            member_id=member_id,
            contribution=contribution,
            reason=SelectionReason.OK,
            total_score=self.total_score + contribution,
        )

    def _rejected(
        self,
        member_id: str,
        reason: SelectionReason,
        message: str | None = None,
    ) -> SelectionResult:
        return SelectionResult(
            member_id=member_id,
            contribution=0.0,
            reason=reason,
            total_score=self.total_score,
            message=message,
        )

    def _is_redundant(self, member: FamilyMember) -> bool:
        """Whether a closer selected relative or the sibling cap covers member."""
        if any(ancestor_id in self._selected_ids for ancestor_id in member.ancestors):
            return True

        if member.relation is RelationType.SIBLING:
            if self._count_selected(RelationType.SIBLING) >= self.MAX_SELECTED_SIBLINGS:
                return True

        return False

    def _calculate_contribution(self, member: FamilyMember) -> float:
        """Base score with harmonic decay over same-type selections."""
        same_type_count = self._count_selected(member.relation)
        return self.base_score(member.relation) / (same_type_count + 1)

    def _update_redundancy(self) -> None:
        """Recompute redundancy for every unselected member."""
        for member in self.pedigree.all():
            if not member.selected:
                member.redundant = self._is_redundant(member)

    def _count_selected(self, relation: RelationType) -> int:
        count = 0
        for member_id in self._selected_ids:
            member = self.pedigree.get(member_id)
            if member is not None and member.relation is relation:
                count += 1
        return count

    def __repr__(self) -> str:
        return (
            f"KinshipScoreEngine({self.profile.markers}-marker, "
            f"{len(self._selected_ids)}/{len(self.pedigree)} selected, "
            f"score={self.total_score:.3f})"
        )


def create_engine(
    profile: MarkerProfile | int | str = MarkerProfile.STR_22,
    members: list[FamilyMember] | None = None,
    profiles_path: Path | str | None = None,
) -> KinshipScoreEngine:
    """Build an engine over the given members."""
    engine = KinshipScoreEngine(profile, registry=ProfileRegistry(profiles_path))
    for member in members or []:
        engine.add_to_pedigree(member)
    return engine
