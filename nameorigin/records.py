#!/usr/bin/env python3
"""
Dataset Records
===============
Typed records for the curated JSON datasets. Records are immutable for
the lifetime of a build; optional fields are ``None`` when the source row
leaves them out.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


GENDERS = ("boy", "girl", "unisex")


def _opt_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


@dataclass(frozen=True)
class NameRecord:
    """A given name from names.json."""
    id: Optional[int]
    name: str
    gender: str = "unisex"
    origin_country: Optional[str] = None
    language: Optional[str] = None
    meaning: Optional[str] = None
    syllables: Optional[int] = None
    first_letter: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NameRecord":
        row = _known(cls, data)
        gender = (_opt_str(row.get("gender")) or "unisex").lower()
        return cls(
            id=_opt_int(row.get("id")),
            name=str(row.get("name") or "").strip(),
            gender=gender if gender in GENDERS else "unisex",
            origin_country=_opt_str(row.get("origin_country")),
            language=_opt_str(row.get("language")),
            meaning=_opt_str(row.get("meaning")),
            syllables=_opt_int(row.get("syllables")),
            first_letter=_opt_str(row.get("first_letter")),
        )


@dataclass(frozen=True)
class SurnameRecord:
    """A surname from last-names.json (or built from a bare string)."""
    name: str
    origin: Optional[str] = None
    syllables: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SurnameRecord":
        if isinstance(data, str):
            return cls(name=data.strip())
        row = _known(cls, data)
        return cls(
            name=str(row.get("name") or "").strip(),
            origin=_opt_str(row.get("origin")),
            syllables=_opt_int(row.get("syllables")),
        )


@dataclass(frozen=True)
class PopularityRow:
    """One ranking observation for a name in a country and year."""
    name_id: int
    country: str = ""
    year: Optional[int] = None
    rank: Optional[int] = None
    count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PopularityRow":
        row = _known(cls, data)
        return cls(
            name_id=_opt_int(row.get("name_id")),
            country=str(row.get("country") or ""),
            year=_opt_int(row.get("year")),
            rank=_opt_int(row.get("rank")),
            count=_opt_int(row.get("count")),
        )


@dataclass(frozen=True)
class CategoryRow:
    """A style tag attached to a name."""
    name_id: int
    category: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategoryRow":
        row = _known(cls, data)
        return cls(
            name_id=_opt_int(row.get("name_id")),
            category=str(row.get("category") or "").strip(),
        )
