"""Name-based media classification.

Folders are always rendered as browsable series; files are episodes when
their name carries an ``SxxEyy`` marker, movies otherwise.
"""

from __future__ import annotations

import re

from telebox.domain.entities.catalog import EntryKind, MediaClassification, MediaType

_EPISODE_RE = re.compile(r"S(\d{1,4})E(\d{1,4})", re.IGNORECASE)


def classify(name: str, kind: EntryKind = EntryKind.FILE) -> MediaClassification:
    """Classify an entry name into movie or series.

    Never raises: names without an episode marker fall through to movie.
    """
    if kind is EntryKind.FOLDER:
        return MediaClassification(type=MediaType.TV_SERIES)

    match = _EPISODE_RE.search(name or "")
    if match is None:
        return MediaClassification(type=MediaType.MOVIE)

    season = int(match.group(1))
    episode = int(match.group(2))
    return MediaClassification(
        type=MediaType.TV_SERIES,
        # S00/E00 are not valid positive numbers
        season=season or None,
        episode=episode or None,
    )
