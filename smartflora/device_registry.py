"""
Device registry.

Holds the pots bound on this device together with their telemetry
snapshot, history series and settings. The registry is loaded from the
key-value store once and written back after every mutation. Mutations
are all-or-nothing: the new list is persisted before it replaces the
in-memory one.

Notes:
- update_settings replaces the settings object wholesale, it never merges.
- unbind_pot on an unknown id is a silent no-op, so retries are safe.
- Pots are not scoped to a session; every identity sees the same registry.
"""

import logging
import random
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Union

from smartflora.errors import AlreadyBound, NotFound
from smartflora.mock_data import generate_history, seed_pots
from smartflora.models import (
    DEFAULT_POT_SETTINGS,
    HistoryKind,
    HistoryPoint,
    Pot,
    PotBinding,
    PotSettings,
)
from smartflora.network import NetworkSimulator
from smartflora.store import POTS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_POT_NAME = "New Pot"
DEFAULT_POT_IMAGE = "https://picsum.photos/200/200"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DeviceRegistry:
    def __init__(
        self,
        store: KeyValueStore,
        network: Optional[NetworkSimulator] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.network = network or NetworkSimulator()
        self.rng = rng or random.Random()
        self.clock = clock

        stored = store.get(POTS_KEY)
        if stored is not None:
            self._pots = [Pot.model_validate(p) for p in stored]
        else:
            # Fresh device: seed the demo pots and persist them so their
            # generated history stays stable across restarts
            self._pots = seed_pots(now=self.clock(), rng=self.rng)
            self._save(self._pots)
            logger.info(f"Seeded registry with {len(self._pots)} pots")

    async def list_pots(self) -> List[Pot]:
        """Snapshot of every bound pot, in registration order."""
        await self.network.roundtrip("list_pots")
        return [pot.model_copy(deep=True) for pot in self._pots]

    async def get_pot(self, pot_id: str) -> Optional[Pot]:
        await self.network.roundtrip("get_pot")
        index = self._index_of(pot_id)
        if index is None:
            return None
        return self._pots[index].model_copy(deep=True)

    async def get_history(self, pot_id: str, kind: HistoryKind) -> List[HistoryPoint]:
        """Moisture or temperature series of a pot, oldest first."""
        await self.network.roundtrip("get_history")
        pot = self._pots[self._require_index(pot_id)]
        if kind == HistoryKind.MOISTURE:
            series = pot.history
        else:
            series = pot.temperature_history
        return [point.model_copy() for point in series]

    async def bind_pot(self, binding: PotBinding) -> Pot:
        """
        Register a new pot from its provisioning data.

        Raises:
            AlreadyBound: if the serial number is already registered
        """
        await self.network.roundtrip("bind_pot")

        if any(
            p.device_serial_number == binding.device_serial_number for p in self._pots
        ):
            raise AlreadyBound(binding.device_serial_number)

        now = self.clock()
        history = generate_history(HistoryKind.MOISTURE, now, self.rng)
        temperature_history = generate_history(HistoryKind.TEMPERATURE, now, self.rng)

        pot = Pot(
            id=self._new_pot_id(),
            name=binding.name or DEFAULT_POT_NAME,
            bind_date=now.date(),
            device_serial_number=binding.device_serial_number,
            anonymous_id=binding.anonymous_id,
            battery_level=100,
            water_level=100,
            soil_moisture=history[-1].value,
            temperature=temperature_history[-1].value,
            image=binding.image or DEFAULT_POT_IMAGE,
            settings=DEFAULT_POT_SETTINGS.model_copy(),
            history=history,
            temperature_history=temperature_history,
        )

        self._commit(self._pots + [pot])
        logger.info(f"Bound pot {pot.id} (serial {pot.device_serial_number})")
        return pot.model_copy(deep=True)

    async def update_settings(
        self, pot_id: str, settings: Union[PotSettings, Mapping[str, Any]]
    ) -> Pot:
        """
        Replace a pot's settings.

        The whole settings object is replaced; fields missing from a mapping
        are not filled in from the previous settings.

        Raises:
            NotFound: if the pot does not exist
            pydantic.ValidationError: if a mapping is not valid settings
        """
        if not isinstance(settings, PotSettings):
            settings = PotSettings.model_validate(settings)

        await self.network.roundtrip("update_settings")
        pot = self._replace(pot_id, settings=settings.model_copy())
        logger.info(f"Updated settings of pot {pot_id}")
        return pot

    async def update_name(self, pot_id: str, name: str) -> Pot:
        await self.network.roundtrip("update_name")
        pot = self._replace(pot_id, name=name)
        logger.info(f"Renamed pot {pot_id}")
        return pot

    async def update_image(self, pot_id: str, image: str) -> Pot:
        await self.network.roundtrip("update_image")
        pot = self._replace(pot_id, image=image)
        logger.info(f"Updated image of pot {pot_id}")
        return pot

    async def unbind_pot(self, pot_id: str) -> None:
        """Remove a pot permanently. Unknown ids are ignored."""
        await self.network.roundtrip("unbind_pot")

        remaining = [p for p in self._pots if p.id != pot_id]
        if len(remaining) == len(self._pots):
            logger.debug(f"Unbind of unknown pot {pot_id} ignored")
        else:
            logger.info(f"Unbound pot {pot_id}")
        self._commit(remaining)

    def _replace(self, pot_id: str, **changes: Any) -> Pot:
        index = self._require_index(pot_id)
        updated = self._pots[index].model_copy(update=changes, deep=True)

        pots = list(self._pots)
        pots[index] = updated
        self._commit(pots)
        return updated.model_copy(deep=True)

    def _commit(self, pots: List[Pot]) -> None:
        self._save(pots)
        self._pots = pots

    def _save(self, pots: List[Pot]) -> None:
        self.store.set(POTS_KEY, [p.model_dump(mode="json") for p in pots])

    def _index_of(self, pot_id: str) -> Optional[int]:
        for index, pot in enumerate(self._pots):
            if pot.id == pot_id:
                return index
        return None

    def _require_index(self, pot_id: str) -> int:
        index = self._index_of(pot_id)
        if index is None:
            raise NotFound(pot_id)
        return index

    def _new_pot_id(self) -> str:
        existing = {p.id for p in self._pots}
        while True:
            pot_id = f"pot_{uuid.uuid4().hex[:12]}"
            if pot_id not in existing:
                return pot_id
