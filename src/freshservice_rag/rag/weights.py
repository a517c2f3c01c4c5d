"""Scoring weight table for the relevance scorer.

The weights and the normalisation ceiling are empirical calibration
constants. They can be overridden from a YAML file, e.g.::

    name_phrase: 2.5
    ceiling: 8.0
    verbs:
      create: 1.0

Verb weights are merged onto the defaults; set a verb to 0 to disable it.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class WeightsError(Exception):
    """The weights file is missing, malformed, or has unknown keys."""


class ScoringWeights(BaseModel):
    """Weights of the lexical relevance signals."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name_phrase: float = 2.0
    name_word: float = 0.5
    description_phrase: float = 1.0
    description_word: float = 0.3
    path_phrase: float = 0.8
    param_name_phrase: float = 0.4
    param_description_phrase: float = 0.2
    domain_keyword: float = 0.5
    curl_example: float = 1.0
    verbs: dict[str, float] = {
        "create": 0.8,
        "get": 0.6,
        "list": 0.6,
        "update": 0.6,
        "delete": 0.6,
    }
    domain_keywords: tuple[str, ...] = ("api", "freshservice")
    # Soft calibration: a realistic maximum of the raw sum, not a hard bound.
    ceiling: float = Field(7.0, gt=0)


DEFAULT_WEIGHTS = ScoringWeights()


def load_weights(file_path: Path) -> ScoringWeights:
    """Load a weight table from YAML; unspecified weights and verbs keep their defaults."""
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise WeightsError(f"Cannot read weights file {file_path}: {e}") from e
    except yaml.YAMLError as e:
        raise WeightsError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        return DEFAULT_WEIGHTS
    if not isinstance(data, dict):
        raise WeightsError(f"{file_path} must contain a mapping of weight names to values")

    if isinstance(data.get("verbs"), dict):
        data["verbs"] = {**DEFAULT_WEIGHTS.verbs, **data["verbs"]}

    try:
        return ScoringWeights(**data)
    except ValidationError as e:
        raise WeightsError(f"Invalid weights in {file_path}: {e}") from e
