#!/usr/bin/env python3
"""
Dataset Loading
===============
Reads the curated JSON exports into typed records and builds the lookup
indexes the scorers need (best rank per name, primary style per name).

Usage:
    from nameorigin.dataset import Dataset

    data = Dataset.load("data/")
    band = data.popularity_band(name.id)
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .records import CategoryRow, NameRecord, PopularityRow, SurnameRecord
from .settings import get_setting, require_setting, resolve_path

logger = logging.getLogger(__name__)

NAMES_FILE = "names.json"
POPULARITY_FILE = "popularity.json"
CATEGORIES_FILE = "categories.json"
SURNAMES_FILE = "last-names.json"

OTHER_BAND = "other"
BAND_ORDER = ("top100", "top500", "top1000", OTHER_BAND)


def load_json(path: Path) -> list:
    """Load a JSON array; a missing file is an empty dataset."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Dataset file not found: {path}")
        return []
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        # Some exports wrap the array: {"names": [...]}
        for value in data.values():
            if isinstance(value, list):
                return value
        return []
    return data or []


# =============================================================================
# Indexes
# =============================================================================

def best_ranks(popularity: Iterable[PopularityRow]) -> Dict[int, int]:
    """Lowest recorded rank per name id (rows without a rank are skipped)."""
    best: Dict[int, int] = {}
    for row in popularity:
        if row.rank is None or row.name_id is None:
            continue
        rank = row.rank or 9999
        current = best.get(row.name_id)
        if current is None or rank < current:
            best[row.name_id] = rank
    return best


def primary_styles(categories: Iterable[CategoryRow]) -> Dict[int, str]:
    """First category listed for each name id, lower-cased."""
    styles: Dict[int, str] = {}
    for row in categories:
        if row.name_id is None or row.name_id in styles:
            continue
        styles[row.name_id] = (row.category or '').lower()
    return styles


def band_for_rank(rank: Optional[int]) -> str:
    """Map a best rank onto top100 / top500 / top1000 / other."""
    if rank is None:
        return OTHER_BAND
    for cut in require_setting("harmony.popularity_bands"):
        if rank < int(cut['below']):
            return str(cut['band'])
    return OTHER_BAND


def popularity_band(name_id: Optional[int], popularity: Iterable[PopularityRow]) -> str:
    """Popularity band for one name, scanning the raw rows."""
    rows = [r for r in popularity if r.name_id == name_id]
    return band_for_rank(best_ranks(rows).get(name_id))


def primary_style(name_id: Optional[int], categories: Iterable[CategoryRow]) -> str:
    for row in categories:
        if row.name_id == name_id:
            return (row.category or '').lower()
    return ''


# =============================================================================
# Dataset
# =============================================================================

@dataclass
class Dataset:
    """All records for one build, with lazily built lookup indexes."""
    names: List[NameRecord] = field(default_factory=list)
    popularity: List[PopularityRow] = field(default_factory=list)
    categories: List[CategoryRow] = field(default_factory=list)
    surnames: List[SurnameRecord] = field(default_factory=list)
    _ranks: Optional[Dict[int, int]] = field(default=None, repr=False)
    _styles: Optional[Dict[int, str]] = field(default=None, repr=False)

    @classmethod
    def load(cls, data_dir=None) -> "Dataset":
        """
        Load every dataset file from ``data_dir``.

        Parameters
        ----------
        data_dir : str or Path, optional
            Directory holding names.json and friends. Defaults to
            ``paths.data_dir`` in app.yaml.
        """
        if data_dir is None:
            data_dir = resolve_path(get_setting("paths.data_dir", "data/sample"))
        data_dir = Path(data_dir)
        names = [NameRecord.from_dict(r) for r in load_json(data_dir / NAMES_FILE)]
        names = [n for n in names if n.name]
        dataset = cls(
            names=names,
            popularity=[PopularityRow.from_dict(r) for r in load_json(data_dir / POPULARITY_FILE)],
            categories=[CategoryRow.from_dict(r) for r in load_json(data_dir / CATEGORIES_FILE)],
            surnames=[SurnameRecord.from_dict(r) for r in load_json(data_dir / SURNAMES_FILE)],
        )
        logger.info(
            f"Loaded {len(dataset.names)} names, {len(dataset.popularity)} popularity rows, "
            f"{len(dataset.categories)} category rows, {len(dataset.surnames)} surnames from {data_dir}"
        )
        return dataset

    @property
    def ranks(self) -> Dict[int, int]:
        if self._ranks is None:
            self._ranks = best_ranks(self.popularity)
        return self._ranks

    @property
    def styles(self) -> Dict[int, str]:
        if self._styles is None:
            self._styles = primary_styles(self.categories)
        return self._styles

    def best_rank(self, name_id: Optional[int]) -> Optional[int]:
        return self.ranks.get(name_id)

    def popularity_band(self, name_id: Optional[int]) -> str:
        return band_for_rank(self.best_rank(name_id))

    def primary_style(self, name_id: Optional[int]) -> str:
        return self.styles.get(name_id, '')

    def names_by_gender(self, gender: str) -> List[NameRecord]:
        target = (gender or '').lower()
        return [n for n in self.names if n.gender == target]

    def find(self, name: str) -> Optional[NameRecord]:
        """Case-insensitive lookup by name."""
        key = (name or '').strip().lower()
        for record in self.names:
            if record.name.lower() == key:
                return record
        return None

    def find_all(self, names: Sequence[str]) -> List[NameRecord]:
        found = []
        for name in names:
            record = self.find(name)
            if record is not None:
                found.append(record)
        return found
