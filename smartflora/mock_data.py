"""
Mock telemetry and seed pots for the registry.
"""

import math
import random
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from smartflora.models import HistoryKind, HistoryPoint, Pot, PotSettings

HISTORY_HOURS = 24


def generate_history(
    kind: HistoryKind,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[HistoryPoint]:
    """
    Generate hourly readings covering the last HISTORY_HOURS hours.

    Points are returned oldest first, ending at ``now``.
    """
    now = now or datetime.now(timezone.utc)
    rng = rng or random.Random()

    points: List[HistoryPoint] = []
    for hours_ago in range(HISTORY_HOURS, -1, -1):
        timestamp = now - timedelta(hours=hours_ago)

        if kind == HistoryKind.MOISTURE:
            # Moisture drops and recovers periodically
            base = 40 + math.sin(hours_ago / 3) * 20
            value = max(0, min(100, math.floor(base + rng.random() * 5)))
        else:
            # Warmer during the device's local day
            is_day = 6 < timestamp.astimezone().hour < 18
            base_temp = 24 if is_day else 19
            value = math.floor(base_temp + (rng.random() - 0.5) * 2)

        points.append(HistoryPoint(timestamp=timestamp, value=value))

    return points


def seed_pots(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Pot]:
    """Pots present in a fresh registry."""
    return [
        Pot(
            id="pot_001",
            name="Living Room Monstera",
            bind_date=date(2023, 10, 15),
            device_serial_number="SN-7823-X921",
            anonymous_id="AID-99283712",
            battery_level=85,
            water_level=40,
            soil_moisture=32,
            temperature=23,
            image="https://picsum.photos/200/200",
            settings=PotSettings(
                start_watering_threshold=30,
                stop_watering_threshold=80,
                auto_stop=True,
                single_water_volume=15,
                indicator_light=True,
            ),
            history=generate_history(HistoryKind.MOISTURE, now, rng),
            temperature_history=generate_history(HistoryKind.TEMPERATURE, now, rng),
        ),
        Pot(
            id="pot_002",
            name="Balcony Basil",
            bind_date=date(2023, 11, 2),
            device_serial_number="SN-4421-B772",
            anonymous_id="AID-11029384",
            battery_level=12,
            water_level=90,
            soil_moisture=65,
            temperature=19,
            image="https://picsum.photos/201/201",
            settings=PotSettings(
                start_watering_threshold=40,
                stop_watering_threshold=75,
                auto_stop=True,
                single_water_volume=10,
                indicator_light=False,
            ),
            history=generate_history(HistoryKind.MOISTURE, now, rng),
            temperature_history=generate_history(HistoryKind.TEMPERATURE, now, rng),
        ),
    ]
