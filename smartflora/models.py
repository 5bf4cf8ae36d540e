"""
SmartFlora - Smart plant pot mock backend
Pydantic models for sessions, pots and API payloads
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# Enums
class HistoryKind(str, Enum):
    MOISTURE = "moisture"
    TEMPERATURE = "temperature"


# Session Models
class UserSession(BaseModel):
    """Anonymous user identity persisted on this device."""

    anonymous_id: str
    token: str
    user_name: str


class LoginRequest(BaseModel):
    scan_payload: str = Field(description="Raw content of the scanned QR code")


class SessionRename(BaseModel):
    user_name: str = Field(min_length=1, max_length=100)


# Pot Models
class HistoryPoint(BaseModel):
    timestamp: datetime
    value: int


class PotSettings(BaseModel):
    """
    Watering configuration owned by a pot.

    The thresholds bound the soil moisture percentage used by the device's
    auto-watering policy. They are stored here, not executed.
    """

    start_watering_threshold: int = Field(ge=0, le=80)
    stop_watering_threshold: int = Field(ge=10, le=95)
    auto_stop: bool
    single_water_volume: int = Field(ge=5, le=20, description="Dose in ml")
    indicator_light: bool

    @model_validator(mode="after")
    def check_threshold_order(self) -> "PotSettings":
        if self.start_watering_threshold >= self.stop_watering_threshold:
            raise ValueError(
                "start_watering_threshold must be lower than stop_watering_threshold"
            )
        return self


DEFAULT_POT_SETTINGS = PotSettings(
    start_watering_threshold=30,
    stop_watering_threshold=80,
    auto_stop=True,
    single_water_volume=10,
    indicator_light=True,
)


class Pot(BaseModel):
    """A bound smart pot with its latest telemetry and history."""

    id: str
    name: str
    bind_date: date
    device_serial_number: str
    anonymous_id: str = Field(description="Device-side identifier")
    battery_level: int = Field(ge=0, le=100)
    water_level: int = Field(ge=0, le=100)
    soil_moisture: int = Field(ge=0, le=100)
    temperature: float = Field(description="Degrees Celsius")
    image: str
    settings: PotSettings
    history: List[HistoryPoint] = Field(
        default_factory=list, description="Soil moisture history"
    )
    temperature_history: List[HistoryPoint] = Field(default_factory=list)

    @field_validator("history", "temperature_history")
    @classmethod
    def check_chronological(cls, points: List[HistoryPoint]) -> List[HistoryPoint]:
        for previous, current in zip(points, points[1:]):
            if current.timestamp < previous.timestamp:
                raise ValueError("history points must be ordered by timestamp")
        return points


class PotBinding(BaseModel):
    """Provisioning data read from a device when binding it."""

    device_serial_number: str = Field(min_length=1)
    anonymous_id: str = Field(min_length=1, description="Device-side identifier")
    name: Optional[str] = None
    image: Optional[str] = None


class PotNameUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class PotImageUpdate(BaseModel):
    image: str = Field(min_length=1, description="Image URL or data URI")
