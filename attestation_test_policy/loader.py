"""Loading of attestations and rule data from files."""

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from attestation_test_policy.models.attestation import Attestation
from attestation_test_policy.models.vocabulary import OutcomeVocabulary

log = logging.getLogger(__name__)


async def load_rule_data(path: Path | None) -> OutcomeVocabulary:
    """Load the outcome vocabulary from a YAML rule data file.

    The vocabulary lists are read from the top-level ``rule_data`` mapping
    when present, otherwise from the document itself. Lists that are not
    given keep their defaults.

    Args:
        path: Rule data file, or None for the default vocabulary

    Returns:
        Validated outcome vocabulary

    Raises:
        FileNotFoundError: If the rule data file doesn't exist
        ValueError: If the file is empty, not valid YAML or fails validation

    """
    if path is None:
        return OutcomeVocabulary()

    if not path.exists():
        raise FileNotFoundError(f"Rule data file not found: {path}")

    content = await asyncio.to_thread(path.read_text)

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty rule data file: {path}")
    if isinstance(data, dict) and "rule_data" in data:
        data = data["rule_data"]

    try:
        vocabulary = OutcomeVocabulary.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid rule data schema in {path}: {e}") from e

    log.debug("Loaded rule data from %s", path)
    return vocabulary


def parse_attestations(data: Any) -> Sequence[Attestation]:
    """Validate decoded JSON into attestations.

    Accepts a single attestation, a bare in-toto statement, or a list of
    either.

    Raises:
        ValidationError: If the data does not match the attestation schema

    """
    items = data if isinstance(data, list) else [data]
    return [
        Attestation.model_validate(
            {"statement": item}
            if isinstance(item, dict) and "statement" not in item
            else item
        )
        for item in items
    ]


async def load_attestations(path: Path) -> Sequence[Attestation]:
    """Load attestations from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid JSON or fails schema validation

    """
    if not path.exists():
        raise FileNotFoundError(f"Attestation file not found: {path}")

    content = await asyncio.to_thread(path.read_text)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        attestations = parse_attestations(data)
    except ValidationError as e:
        raise ValueError(f"Invalid attestation schema in {path}: {e}") from e

    log.debug("Loaded %d attestation(s) from %s", len(attestations), path)
    return attestations
