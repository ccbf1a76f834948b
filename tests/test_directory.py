"""Tests for the intervenants directory."""

from spill_registry.core.directory import DEFAULT_INTERVENANTS, add_intervenants, search_intervenants
from spill_registry.seed import load_intervenants


def test_add_intervenants_skips_existing(db):
    """Test seeding twice does not duplicate entries."""
    assert add_intervenants(db, DEFAULT_INTERVENANTS) == len(DEFAULT_INTERVENANTS)
    assert add_intervenants(db, DEFAULT_INTERVENANTS) == 0
    assert len(search_intervenants(db)) == len(DEFAULT_INTERVENANTS)


def test_search_intervenants(db):
    """Test search by name, role and organization."""
    add_intervenants(db, DEFAULT_INTERVENANTS)

    assert [i.organization for i in search_intervenants(db, "eccc")] == ["ECCC"]
    assert len(search_intervenants(db, "interne")) == 2
    assert len(search_intervenants(db, "val-d'or")) == 2
    assert search_intervenants(db, "pompiers") == []


def test_load_intervenants_yaml(tmp_path):
    """Test loading directory entries from YAML."""
    yaml_file = tmp_path / "intervenants.yaml"
    yaml_file.write_text(
        "intervenants:\n"
        "  - name: Service incendie\n"
        "    role: Municipal\n"
        "    contact: '911'\n"
        "    organization: Ville\n",
        encoding="utf-8",
    )

    entries = load_intervenants(str(yaml_file))

    assert entries == [{"name": "Service incendie", "role": "Municipal", "contact": "911", "organization": "Ville"}]
    assert load_intervenants() == DEFAULT_INTERVENANTS
