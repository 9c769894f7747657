"""Field precedence helpers shared by the catalog normalisers."""

from __future__ import annotations

from typing import Any, Mapping, Sequence


THUMBNAIL_FIELDS: tuple[str, ...] = (
    "episode_card_thumbnail",
    "episode_list_thumbnail",
    "thumbnail",
)
RELEASE_YEAR_FIELDS: tuple[str, ...] = ("year", "release_year")


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == 0


def first_present(record: Mapping[str, Any], fields: Sequence[str]) -> Any:
    """Return the first non-empty value found in ``record`` following ``fields``."""

    for field in fields:
        value = record.get(field)
        if not _is_empty(value):
            return value
    return None


def resolve_thumbnail(record: Mapping[str, Any]) -> str | None:
    """Pick the card thumbnail, then the list thumbnail, then the generic one."""

    return first_present(record, THUMBNAIL_FIELDS)


def resolve_release_year(record: Mapping[str, Any]) -> int | None:
    """Return ``year`` when set, otherwise ``release_year``."""

    value = first_present(record, RELEASE_YEAR_FIELDS)
    return coerce_int(value)


def coerce_int(value: Any, *, default: int | None = None) -> int | None:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_list(value: Any) -> list[Any]:
    """Return ``value`` when it is a list, an empty list otherwise."""

    if isinstance(value, list):
        return value
    return []


def as_genres(value: Any) -> list[str]:
    """Return genres as a list, splitting comma separated strings."""

    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(genre) for genre in as_list(value) if genre]
