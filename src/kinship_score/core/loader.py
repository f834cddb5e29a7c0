"""
Pedigree file loading.

Reads a pedigree described in YAML (or JSON, which YAML accepts):

    profile: 22
    members:
      - id: child1
        relation: child
      - id: grandchild1
        relation: grandchild
        ancestors: [child1]

Descendant back-references are filled in from the ancestor lists.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from kinship_score.core.models import FamilyMember, MarkerProfile
from kinship_score.core.pedigree import PedigreeStore

logger = logging.getLogger(__name__)


def _id_set(value: Any) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, str):
        return {value}
    return {str(v) for v in value}


# Selection state belongs to the scoring engine, never to the file
ENGINE_OWNED_FIELDS = ("selected", "redundant")


def pedigree_from_dict(data: dict[str, Any]) -> tuple[PedigreeStore, MarkerProfile | None]:
    """Build a pedigree (and optional marker profile) from parsed data."""
    if not isinstance(data, dict):
        raise ValueError("Pedigree document must be a mapping")

    members_data = data.get("members")
    if not isinstance(members_data, list):
        raise ValueError("Pedigree document needs a 'members' list")

    profile = None
    if data.get("profile") is not None:
        profile = MarkerProfile(data["profile"])

    store = PedigreeStore()
    for entry in members_data:
        if not isinstance(entry, dict):
            raise ValueError(f"Invalid member entry: {entry!r}")
        ignored = [key for key in ENGINE_OWNED_FIELDS if key in entry]
        if ignored:
            logger.warning("Ignoring %s for member %s", ", ".join(ignored), entry.get("id"))
        fields = {k: v for k, v in entry.items() if k not in ENGINE_OWNED_FIELDS}
        member = FamilyMember.model_validate({
            **fields,
            "ancestors": _id_set(entry.get("ancestors")),
            "descendants": _id_set(entry.get("descendants")),
        })
        if member.id in store:
            raise ValueError(f"Duplicate member id: {member.id}")
        store.add(member)

    # Back-references for ancestors present in the file
    for member in store.all():
        for ancestor_id in member.ancestors:
            ancestor = store.get(ancestor_id)
            if ancestor is None:
                logger.warning("Member %s lists unknown ancestor %s", member.id, ancestor_id)
                continue
            ancestor.descendants.add(member.id)

    return store, profile


def load_pedigree(path: str | Path) -> tuple[PedigreeStore, MarkerProfile | None]:
    """Load a pedigree file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Pedigree file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Cannot parse pedigree file {path}: {e}") from e

    store, profile = pedigree_from_dict(data)
    logger.debug("Loaded %d members from %s", len(store), path)
    return store, profile
