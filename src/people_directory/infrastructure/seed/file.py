from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from people_directory.application.normalizer import prepare_seed_record
from people_directory.domain.models import Person
from people_directory.domain.time import InvalidDate
from people_directory.domain.uniqueness import name_key

logger = logging.getLogger(__name__)


def load_people(path: str | Path) -> List[Person]:
    """Load initial people from a JSON file holding a list of records.

    Birth dates in the file are ``dd/mm/yyyy`` text and are converted to
    timestamps. Records that cannot be normalized, or that repeat an id or a
    name pair, are skipped with a warning.

    Args:
        path: Location of the JSON seed file.

    Raises:
        ValueError: If the file is not valid JSON or does not hold a list.
    """

    seed_path = Path(path)
    with open(seed_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Seed file {seed_path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError(f"Seed file {seed_path} must contain a JSON list of people")

    people: List[Person] = []
    seen_ids = set()
    seen_names = set()
    for position, raw in enumerate(data):
        if not isinstance(raw, dict):
            logger.warning("Skipping seed entry %d: not an object", position)
            continue
        try:
            person = prepare_seed_record(raw)
        except (InvalidDate, ValidationError) as e:
            logger.warning("Skipping seed entry %d: %s", position, e)
            continue
        if person.id in seen_ids:
            logger.warning("Skipping seed entry %d: duplicate id %s", position, person.id)
            continue
        names = name_key(person.lastname, person.firstname)
        if names in seen_names:
            logger.warning("Skipping seed entry %d: duplicate name pair %s", position, person.name_pair())
            continue
        seen_ids.add(person.id)
        seen_names.add(names)
        people.append(person)

    logger.info("Loaded %d people from %s", len(people), seed_path)
    return people
