"""Bundled sample entries used whenever the live feed cannot be used."""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, List

from ..core.models import Entry
from ..core.paths import get_system_path

logger = logging.getLogger(__name__)

SAMPLE_DATA_PATH = get_system_path("data", "sample-data.json")


@lru_cache(maxsize=1)
def _load_raw() -> Dict[str, Any]:
    with open(SAMPLE_DATA_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def get_sample_entries() -> List[Entry]:
    """Return fresh Entry objects for the bundled sample set."""
    return [Entry.from_dict(item) for item in _load_raw().get("entries", [])]
