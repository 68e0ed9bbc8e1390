#!/usr/bin/env python3
"""
Load plant records from a JSON file into the plants table.
The file holds a list of objects with the PlantCreateRequest fields.
Run: python scripts/seed_plants.py plants.json [--publish]
"""
import sys
import json
import argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from fastapi import HTTPException
from pydantic import ValidationError

from agroguide.db.postgres import get_db
from agroguide.services.plants.schemas import PlantCreateRequest
from agroguide.services.plants.service import PlantService


def seed_plants(path: Path, publish: bool = False) -> int:
    records = json.loads(path.read_text(encoding="utf-8"))
    db = next(get_db())
    service = PlantService(db)
    added = 0

    try:
        print(f"Seeding {len(records)} plant(s) from {path}...")
        for idx, record in enumerate(records, 1):
            if publish:
                record["published"] = True
            try:
                plant = service.create_plant(PlantCreateRequest(**record))
                added += 1
                print(f"  [{idx}/{len(records)}] ✓ {plant.common_name} -> {plant.slug}")
            except (ValidationError, HTTPException) as e:
                print(f"  [{idx}/{len(records)}] ✗ {record.get('common_name', '?')}: {e}")

        print(f"\n✅ Added {added} of {len(records)} plant(s)")
        return added
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Seed the plant catalog from JSON")
    parser.add_argument("file", type=Path, help="JSON file with a list of plants")
    parser.add_argument("--publish", action="store_true", help="Publish every seeded plant")
    args = parser.parse_args()

    seed_plants(args.file, publish=args.publish)


if __name__ == "__main__":
    main()
