"""Static reference data and slug helpers."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from functools import lru_cache

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True, slots=True)
class BodyType:
    id: int
    name: str
    image: str


@lru_cache(maxsize=1)
def body_types() -> tuple[BodyType, ...]:
    """Body types shown on the home page, built once per process."""
    return (
        BodyType(id=1, name="SUV", image="/body/suv.webp"),
        BodyType(id=2, name="Sedan", image="/body/sedan.webp"),
        BodyType(id=3, name="Hatchback", image="/body/hatchback.webp"),
        BodyType(id=4, name="Coupe", image="/body/coupe.webp"),
    )


def slugify(name: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    Accents are stripped and every run of other characters becomes a single
    hyphen: "Mercedes-Benz" -> "mercedes-benz", "Rosé Gold" -> "rose-gold".

    Raises:
        ValueError: If the name has no characters usable in a slug
    """
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", ascii_name.lower()).strip("-")
    if not slug:
        raise ValueError(f"Cannot derive a slug from {name!r}")
    return slug
