"""Genre-aware random suggestions for the series detail view."""

from __future__ import annotations

import random
from typing import Iterable, Sequence

from ..models import LibraryEntry

MIN_GENRE_MATCHES = 3
SUGGESTION_COUNTS: tuple[int, ...] = (3, 4, 5)


class RecommendationSampler:
    """Select a small random set of other series, preferring shared genres.

    The sampler keeps no state between calls; the randomness source is
    injectable so pool selection can be tested with a seeded generator.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    @staticmethod
    def candidates(current_slug: str, library: Iterable[LibraryEntry]) -> list[LibraryEntry]:
        return [
            entry
            for entry in library
            if entry.type == "series" and entry.slug and entry.slug != current_slug
        ]

    @staticmethod
    def select_pool(
        genres: Sequence[str], candidates: Sequence[LibraryEntry]
    ) -> list[LibraryEntry]:
        """Return the genre-overlap candidates, or all of them when too few overlap."""

        wanted = set(genres)
        overlapping = [entry for entry in candidates if wanted.intersection(entry.genres)]
        if len(overlapping) >= MIN_GENRE_MATCHES:
            return overlapping
        return list(candidates)

    def sample(
        self,
        current_slug: str,
        genres: Sequence[str],
        library: Iterable[LibraryEntry],
    ) -> list[LibraryEntry]:
        pool = self.select_pool(genres, self.candidates(current_slug, library))
        if not pool:
            return []
        shuffled = self._rng.sample(pool, len(pool))
        count = self._rng.choice(SUGGESTION_COUNTS)
        return shuffled[:count]
