"""Tests for pedigree file loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from kinship_score.core.engine import KinshipScoreEngine
from kinship_score.core.loader import load_pedigree, pedigree_from_dict
from kinship_score.core.models import MarkerProfile, RelationType, SelectionReason


class TestLoadPedigree:
    """Tests for load_pedigree()."""

    def test_load(self, pedigree_file: Path):
        store, profile = load_pedigree(pedigree_file)

        assert profile is MarkerProfile.STR_22
        assert store.ids() == ["mother", "father", "sibling1", "child1", "grandchild1"]
        assert store.get("mother").label == "Maria Lopez"
        assert store.get("sibling1").relation is RelationType.SIBLING

    def test_back_references(self, pedigree_file: Path):
        store, _ = load_pedigree(pedigree_file)

        assert store.get("grandchild1").ancestors == {"child1"}
        assert store.get("child1").descendants == {"grandchild1"}

    def test_loaded_pedigree_scores(self, pedigree_file: Path, registry):
        store, profile = load_pedigree(pedigree_file)
        engine = KinshipScoreEngine(profile, pedigree=store, registry=registry)

        engine.select("child1")
        assert engine.select("grandchild1").reason is SelectionReason.REDUNDANT

    def test_json_file(self, tmp_path: Path):
        path = tmp_path / "pedigree.json"
        path.write_text('{"profile": 15, "members": [{"id": "m", "relation": "parent"}]}')

        store, profile = load_pedigree(path)
        assert profile is MarkerProfile.STR_15
        assert len(store) == 1

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_pedigree(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("members: [unclosed\n")
        with pytest.raises(ValueError):
            load_pedigree(path)


class TestPedigreeFromDict:
    """Tests for pedigree_from_dict()."""

    def test_profile_optional(self):
        store, profile = pedigree_from_dict({"members": []})
        assert profile is None
        assert len(store) == 0

    def test_single_ancestor_string(self):
        store, _ = pedigree_from_dict({"members": [
            {"id": "c", "relation": "child"},
            {"id": "g", "relation": "grandchild", "ancestors": "c"},
        ]})
        assert store.get("g").ancestors == {"c"}

    def test_unknown_ancestor_kept(self):
        store, _ = pedigree_from_dict({"members": [
            {"id": "g", "relation": "grandchild", "ancestors": ["elsewhere"]},
        ]})
        assert store.get("g").ancestors == {"elsewhere"}

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            pedigree_from_dict(["mother"])

    def test_members_missing(self):
        with pytest.raises(ValueError, match="members"):
            pedigree_from_dict({"profile": 22})

    def test_duplicate_id(self):
        with pytest.raises(ValueError, match="Duplicate"):
            pedigree_from_dict({"members": [
                {"id": "m", "relation": "parent"},
                {"id": "m", "relation": "parent"},
            ]})

    def test_engine_flags_ignored(self, registry):
        """Selection flags in a file never count as scored selections."""
        store, _ = pedigree_from_dict({"members": [
            {"id": "mother", "relation": "parent", "selected": True},
            {"id": "father", "relation": "parent", "redundant": True},
        ]})

        assert not store.get("mother").selected
        assert not store.get("father").redundant

        engine = KinshipScoreEngine(22, pedigree=store, registry=registry)
        result = engine.select("mother")
        assert result.reason is SelectionReason.OK
        assert engine.total_score == 10.0
        assert engine.selected_ids == {"mother"}

    def test_camel_case_relations(self):
        store, _ = pedigree_from_dict({"members": [
            {"id": "u", "relation": "uncleAunt"},
            {"id": "n", "relation": "nephewNiece"},
            {"id": "h", "relation": "halfSibling"},
        ]})
        assert [m.relation for m in store.all()] == [
            RelationType.UNCLE_AUNT,
            RelationType.NEPHEW_NIECE,
            RelationType.HALF_SIBLING,
        ]

    def test_bad_relation(self):
        with pytest.raises(ValidationError):
            pedigree_from_dict({"members": [{"id": "m", "relation": "godparent"}]})

    def test_bad_profile(self):
        with pytest.raises(ValueError):
            pedigree_from_dict({"profile": 16, "members": []})
