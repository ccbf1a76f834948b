"""Seed script for the intervenants directory."""

import sys
from typing import Dict, List, Optional

import yaml
from sqlalchemy.orm import Session

from spill_registry.core.directory import DEFAULT_INTERVENANTS, add_intervenants
from spill_registry.database import SessionLocal


def load_intervenants(yaml_file: Optional[str] = None) -> List[Dict]:
    """Read the `intervenants:` list from a YAML file, or the built-in defaults."""
    if not yaml_file:
        return DEFAULT_INTERVENANTS
    with open(yaml_file, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data.get("intervenants", [])


def seed_intervenants(yaml_file: Optional[str] = None) -> int:
    """Seed intervenants from YAML file or defaults."""
    db: Session = SessionLocal()
    try:
        entries = load_intervenants(yaml_file)
        if not entries:
            print("No intervenants found in YAML file")
            return 0

        added = add_intervenants(db, entries)
        print(f"Successfully seeded {added} of {len(entries)} intervenants")
        return added
    except Exception as e:
        print(f"Error seeding intervenants: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    seed_intervenants(sys.argv[1] if len(sys.argv) > 1 else None)
