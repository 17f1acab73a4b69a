import json
from pathlib import Path

import pytest

from coindetails.preferences import Preferences, PreferenceStore


@pytest.fixture
def store(tmp_path: Path) -> PreferenceStore:
    return PreferenceStore(tmp_path / "prefs" / "preferences.json")


@pytest.mark.asyncio
async def test_defaults_when_nothing_stored(store: PreferenceStore) -> None:
    prefs = await store.load()
    assert prefs == Preferences(selected_currency="USD", rank=None)


@pytest.mark.asyncio
async def test_save_then_load(store: PreferenceStore) -> None:
    await store.save(Preferences(selected_currency="EUR", rank=3))

    assert store.path.exists()
    assert json.loads(store.path.read_text(encoding="utf-8")) == {
        "selected_currency": "EUR",
        "rank": 3,
    }
    assert await store.load() == Preferences(selected_currency="EUR", rank=3)


@pytest.mark.asyncio
async def test_last_save_wins(store: PreferenceStore) -> None:
    await store.save(Preferences(selected_currency="EUR"))
    await store.save(Preferences(selected_currency="GBP"))
    assert (await store.load()).selected_currency == "GBP"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    ["{not json", "[1, 2]", '{"selected_currency": 5, "rank": "x"}'],
)
async def test_corrupt_file_yields_defaults(
    store: PreferenceStore, content: str
) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text(content, encoding="utf-8")
    assert await store.load() == Preferences()


@pytest.mark.asyncio
async def test_currency_is_normalized_on_load(store: PreferenceStore) -> None:
    store.path.parent.mkdir(parents=True)
    store.path.write_text('{"selected_currency": " eur "}', encoding="utf-8")
    assert (await store.load()).selected_currency == "EUR"


@pytest.mark.asyncio
async def test_save_reports_success(store: PreferenceStore) -> None:
    assert await store.save(Preferences(selected_currency="EUR")) is True


@pytest.mark.asyncio
async def test_save_fails_when_parent_is_a_file(tmp_path: Path) -> None:
    blocker = tmp_path / "prefs"
    blocker.write_text("not a directory", encoding="utf-8")
    store = PreferenceStore(blocker / "preferences.json")

    assert await store.save(Preferences(selected_currency="EUR")) is False
    assert blocker.read_text(encoding="utf-8") == "not a directory"


@pytest.mark.asyncio
async def test_failed_save_leaves_no_temporary_file(tmp_path: Path) -> None:
    target = tmp_path / "preferences.json"
    target.mkdir()
    store = PreferenceStore(target)

    assert await store.save(Preferences(selected_currency="EUR")) is False
    assert target.is_dir()
    assert list(tmp_path.glob("*.tmp")) == []
