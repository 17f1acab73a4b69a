import asyncio
import json
from dataclasses import asdict, dataclass
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class Preferences:
    """What the user last chose on the detail screen."""

    selected_currency: str = DEFAULT_CURRENCY
    rank: int | None = None


class PreferenceStore:
    """Persists the last selected currency (and last viewed rank) as JSON.

    Reads and writes go through `aiofiles` so the event loop driving the
    presentation layer is never blocked on disk. A missing or unreadable file
    yields the defaults rather than an error.
    """

    def __init__(self, path: Path) -> None:
        """Initializes the store.

        Args:
            path: The JSON file holding the preferences.
        """
        self.path = path
        self._lock = asyncio.Lock()

    async def load(self) -> Preferences:
        """Reads the stored preferences, falling back to defaults."""
        async with self._lock:
            if not await aiofiles.os.path.exists(self.path):
                logger.debug(f"No preferences at '{self.path}'; using defaults.")
                return Preferences()
            try:
                async with aiofiles.open(self.path, encoding="utf-8") as f:
                    data = json.loads(await f.read())
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Could not read preferences from '{self.path}': {e}")
                return Preferences()

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed preferences in '{self.path}'.")
            return Preferences()

        currency = data.get("selected_currency")
        if not isinstance(currency, str) or not currency.strip():
            currency = DEFAULT_CURRENCY
        rank = data.get("rank")
        if not isinstance(rank, int) or isinstance(rank, bool):
            rank = None
        return Preferences(selected_currency=currency.strip().upper(), rank=rank)

    async def save(self, preferences: Preferences) -> bool:
        """Writes the preferences, replacing what was stored before.

        I/O failures are logged and reported through the return value; the
        previous file, if any, is left untouched and no temporary file remains.

        Returns:
            True if the preferences were written.
        """
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        async with self._lock:
            try:
                await aiofiles.os.makedirs(self.path.parent, exist_ok=True)
                async with aiofiles.open(tmp_path, mode="w", encoding="utf-8") as f:
                    await f.write(json.dumps(asdict(preferences), indent=2))
                await aiofiles.os.replace(tmp_path, self.path)
            except OSError as e:
                logger.error(f"Could not save preferences to '{self.path}': {e}")
                return False
            finally:
                await self._discard(tmp_path)
        logger.info(
            f"Saved preferences (currency={preferences.selected_currency}) "
            f"to '{self.path}'."
        )
        return True

    @staticmethod
    async def _discard(tmp_path: Path) -> None:
        """Removes a leftover temporary file."""
        try:
            if await aiofiles.os.path.isfile(tmp_path):
                await aiofiles.os.remove(tmp_path)
        except OSError:
            logger.exception(f"Could not remove temporary file '{tmp_path}'.")
