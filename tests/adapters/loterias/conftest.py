"""Shared fixtures for the official results adapter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from boletipy.domain.model import GameType

SearchPayload = list[dict[str, object]]
FIXTURES = Path(__file__).resolve().parents[2] / "data" / "loterias"

_FILES = {
    GameType.SIX_NUMBER: "primitiva_search.json",
    GameType.FIVE_STAR: "euromillones_search.json",
    GameType.FIVE_KEY: "gordo_search.json",
}


def load_search_payload(game_type: GameType) -> SearchPayload:
    with (FIXTURES / _FILES[game_type]).open(encoding="utf-8") as handle:
        return json.load(handle)


@pytest.fixture
def primitiva_payload() -> SearchPayload:
    return load_search_payload(GameType.SIX_NUMBER)


@pytest.fixture
def euromillones_payload() -> SearchPayload:
    return load_search_payload(GameType.FIVE_STAR)


@pytest.fixture
def gordo_payload() -> SearchPayload:
    return load_search_payload(GameType.FIVE_KEY)
