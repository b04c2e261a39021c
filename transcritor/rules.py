"""
Rule table loading.

A rule table is a JSON list of ``[original, replacement]`` pairs, or of
objects with ``original`` and ``replacement`` keys.  Order matters and is
preserved exactly as written; originals do not have to be unique.

The table lives in one of three places, chosen by ``RULES_SOURCE``:

* unset: the table packaged in ``transcritor/data/substituicoes.json``;
* a local path;
* a ``gs://bucket/object`` URI, downloaded from Cloud Storage.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

from google.cloud import storage
from tenacity import retry, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "data" / "substituicoes.json"
GCS_SCHEME = "gs://"


@dataclass(frozen=True)
class Rule:
    original: str
    replacement: str


class RuleTableError(ValueError):
    """Raised when a rule table cannot be parsed."""


def parse_rules(data: Any) -> Tuple[Rule, ...]:
    """Validate decoded JSON and return it as an ordered tuple of rules."""
    if not isinstance(data, list):
        raise RuleTableError("Rule table must be a JSON list")
    rules: List[Rule] = []
    for position, entry in enumerate(data):
        if isinstance(entry, dict):
            pair = (entry.get("original"), entry.get("replacement"))
        elif isinstance(entry, list) and len(entry) == 2:
            pair = tuple(entry)
        else:
            raise RuleTableError(f"Rule #{position} must be a pair: {entry!r}")
        if not all(isinstance(word, str) and word for word in pair):
            raise RuleTableError(f"Rule #{position} needs two non-empty strings: {entry!r}")
        rules.append(Rule(*pair))
    return tuple(rules)


def _split_gcs_uri(uri: str) -> Tuple[str, str]:
    bucket, _, blob_name = uri[len(GCS_SCHEME):].partition("/")
    if not bucket or not blob_name:
        raise RuleTableError(f"Invalid Cloud Storage URI: {uri}")
    return bucket, blob_name


@retry(wait=wait_exponential(multiplier=1), stop=stop_after_attempt(3), reraise=True)
def _download_text(bucket_name: str, blob_name: str) -> str:
    client = storage.Client()
    return client.bucket(bucket_name).blob(blob_name).download_as_text()


def read_source(source: str) -> str:
    """Return the raw JSON text of a rule table."""
    if source.startswith(GCS_SCHEME):
        bucket, blob_name = _split_gcs_uri(source)
        logger.info("Downloading rule table from %s", source)
        return _download_text(bucket, blob_name)
    logger.info("Reading rule table from %s", source)
    return Path(source).read_text(encoding="utf-8")


def load_rules(source: Optional[str] = None) -> Tuple[Rule, ...]:
    """Load the ordered rule table.

    Args:
        source: Local path or ``gs://`` URI.  Defaults to the
            ``RULES_SOURCE`` environment variable, then to the packaged
            table.

    Returns:
        The rules in table order.

    Raises:
        RuleTableError: If the document is not valid JSON or not a list
            of word pairs.
    """
    source = source or os.environ.get("RULES_SOURCE") or str(DEFAULT_RULES_PATH)
    try:
        data = json.loads(read_source(source))
    except json.JSONDecodeError as exc:
        raise RuleTableError(f"Rule table {source} is not valid JSON: {exc}") from exc
    rules = parse_rules(data)
    logger.info("Loaded %d substitution rules from %s", len(rules), source)
    return rules
