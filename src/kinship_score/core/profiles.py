"""Scoring profile registry.

Loads saturation thresholds and base score tables per STR marker profile
from YAML.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from kinship_score.core.models import MarkerProfile, RelationType

logger = logging.getLogger(__name__)

DEFAULT_PROFILES_PATH = Path(__file__).parent.parent / "data" / "profiles.yaml"


@dataclass
class ScoringProfile:
    """Score table for one STR marker profile."""

    profile: MarkerProfile
    name: str
    saturation_threshold: float
    base_scores: dict[RelationType, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, key: str, data: dict[str, Any]) -> ScoringProfile:
        """Create from dictionary (YAML data)."""
        try:
            profile = MarkerProfile(str(key))
        except ValueError:
            raise ValueError(f"Unknown marker profile: {key}") from None

        if "saturation_threshold" not in data:
            raise ValueError(f"Profile {key} has no saturation_threshold")

        base_scores: dict[RelationType, float] = {}
        for relation_name, score in (data.get("base_scores") or {}).items():
            try:
                relation = RelationType(relation_name)
            except ValueError:
                raise ValueError(
                    f"Profile {key} has a score for unknown relation: {relation_name}"
                ) from None
            base_scores[relation] = float(score)

        return cls(
            profile=profile,
            name=data.get("name", f"{profile.markers}-marker"),
            saturation_threshold=float(data["saturation_threshold"]),
            base_scores=base_scores,
        )

    def base_score(self, relation: RelationType) -> float:
        """Base score for a relation; relations without a row score 0.0."""
        return self.base_scores.get(relation, 0.0)


class ProfileRegistry:
    """Registry of scoring profiles loaded from YAML."""

    def __init__(self, profiles_path: Path | str | None = None):
        """Initialize registry from YAML file."""
        if profiles_path is None:
            profiles_path = DEFAULT_PROFILES_PATH

        self._profiles_path = Path(profiles_path)
        self._profiles: dict[MarkerProfile, ScoringProfile] = {}
        self._load()

    def _load(self) -> None:
        """Load profiles from YAML file."""
        if not self._profiles_path.exists():
            raise FileNotFoundError(f"Profiles file not found: {self._profiles_path}")

        with open(self._profiles_path) as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not isinstance(data.get("profiles"), dict):
            raise ValueError(f"No 'profiles' mapping in {self._profiles_path}")

        for key, profile_data in data["profiles"].items():
            profile = ScoringProfile.from_dict(key, profile_data or {})
            self._profiles[profile.profile] = profile

        logger.debug("Loaded %d scoring profiles from %s", len(self._profiles), self._profiles_path)

    def get_profile(self, profile: MarkerProfile | int | str) -> ScoringProfile | None:
        """Get the score table for a marker profile."""
        try:
            key = MarkerProfile(profile)
        except ValueError:
            return None
        return self._profiles.get(key)

    def all_profiles(self) -> list[ScoringProfile]:
        """All profiles, ordered by marker count."""
        return sorted(self._profiles.values(), key=lambda p: p.profile.markers)

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"ProfileRegistry({len(self._profiles)} profiles)"
