"""Fixtures for catalog tests."""

from datetime import datetime, timezone
from typing import Any

import pytest

from catalog.domain.value_objects import Album, Song

CREATED = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
SONG_ID = "65f1c0a1b2c3d4e5f6a7b8c9"
ALBUM_ID = "65f1c0a1b2c3d4e5f6a7b8ca"


def make_song(**overrides: Any) -> Song:
    fields: dict[str, Any] = {
        "id": SONG_ID,
        "title": "Jah Guide",
        "artist": "Rasman Peter Dudu",
        "genre": "Reggae",
        "duration": 245,
        "price": 1.99,
        "file_key": "songs/jah-guide.mp3",
        "cover_art_url": "https://cdn.example/jah-guide.jpg",
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    fields.update(overrides)
    return Song(**fields)


def make_album(**overrides: Any) -> Album:
    fields: dict[str, Any] = {
        "id": ALBUM_ID,
        "title": "Roots Revival",
        "artist": "Rasman Peter Dudu",
        "price": 9.99,
        "cover_art_url": "https://cdn.example/roots.jpg",
        "release_date": CREATED,
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    fields.update(overrides)
    return Album(**fields)


@pytest.fixture
def song_factory():
    """Build Song value objects with overridable fields."""
    return make_song


@pytest.fixture
def album_factory():
    """Build Album value objects with overridable fields."""
    return make_album
