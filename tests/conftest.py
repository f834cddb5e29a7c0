"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from kinship_score.core.engine import KinshipScoreEngine
from kinship_score.core.models import FamilyMember, MarkerProfile, RelationType
from kinship_score.core.pedigree import PedigreeStore
from kinship_score.core.profiles import ProfileRegistry


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def registry() -> ProfileRegistry:
    """Bundled scoring profiles."""
    return ProfileRegistry()


@pytest.fixture
def engine_22(registry: ProfileRegistry) -> KinshipScoreEngine:
    """Empty engine on the 22-marker profile."""
    return KinshipScoreEngine(MarkerProfile.STR_22, registry=registry)


@pytest.fixture
def engine_15(registry: ProfileRegistry) -> KinshipScoreEngine:
    """Empty engine on the 15-marker profile."""
    return KinshipScoreEngine(MarkerProfile.STR_15, registry=registry)


# =============================================================================
# Pedigree Fixtures
# =============================================================================

@pytest.fixture
def reference_members() -> list[FamilyMember]:
    """Mother, father, one sibling, one child and the child's child."""
    return [
        FamilyMember(id="mother", relation=RelationType.PARENT),
        FamilyMember(id="father", relation=RelationType.PARENT),
        FamilyMember(id="sibling1", relation=RelationType.SIBLING),
        FamilyMember(id="child1", relation=RelationType.CHILD, descendants={"grandchild1"}),
        FamilyMember(id="grandchild1", relation=RelationType.GRANDCHILD, ancestors={"child1"}),
    ]


@pytest.fixture
def reference_engine(
    engine_22: KinshipScoreEngine,
    reference_members: list[FamilyMember],
) -> KinshipScoreEngine:
    """22-marker engine with the reference pedigree registered."""
    for member in reference_members:
        engine_22.add_to_pedigree(member)
    return engine_22


@pytest.fixture
def siblings_store() -> PedigreeStore:
    """Five siblings and nothing else."""
    return PedigreeStore([
        FamilyMember(id=f"sibling{i}", relation=RelationType.SIBLING)
        for i in range(1, 6)
    ])


# =============================================================================
# File Fixtures
# =============================================================================

@pytest.fixture
def sample_pedigree_yaml() -> str:
    """Pedigree file content for the reference family."""
    return """\
profile: 22
members:
  - id: mother
    relation: parent
    label: Maria Lopez
  - id: father
    relation: parent
  - id: sibling1
    relation: sibling
  - id: child1
    relation: child
  - id: grandchild1
    relation: grandchild
    ancestors: [child1]
"""


@pytest.fixture
def pedigree_file(tmp_path: Path, sample_pedigree_yaml: str) -> Path:
    """Write the sample pedigree to a temporary file."""
    path = tmp_path / "pedigree.yaml"
    path.write_text(sample_pedigree_yaml)
    return path
