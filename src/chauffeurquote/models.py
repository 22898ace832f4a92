from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime, timedelta
from typing import Annotated, Optional

# HH:MM, "24:00" allowed as end of day
TimeOfDay = Annotated[str, Field(pattern=r"^(?:(?:[01]\d|2[0-3]):[0-5]\d|24:00)$")]
Amount = Annotated[float, Field(ge=0)]


def presentation_alias(name: str) -> str:
    """one_way_price_ht -> oneWayPriceHT, total_vat -> totalVAT"""
    camel = to_camel(name)
    for suffix in ("Ht", "Vat"):
        if camel.endswith(suffix):
            return camel[: -len(suffix)] + suffix.upper()
    return camel


class RateFields(BaseModel):
    """Rate overrides shared by vehicles and driver defaults. None = not set."""
    base_price_per_km: Optional[Amount] = None
    night_rate_enabled: Optional[bool] = None
    night_rate_start: Optional[TimeOfDay] = None
    night_rate_end: Optional[TimeOfDay] = None
    night_rate_percentage: Optional[Amount] = None
    holiday_sunday_percentage: Optional[Amount] = None
    minimum_trip_fare: Optional[Amount] = None
    min_trip_distance_km: Optional[Amount] = None
    wait_price_per_15_min: Optional[Amount] = None
    wait_night_enabled: Optional[bool] = None
    wait_night_start: Optional[TimeOfDay] = None
    wait_night_end: Optional[TimeOfDay] = None
    wait_night_percentage: Optional[Amount] = None


class VehicleRateProfile(RateFields):
    id: str
    name: Optional[str] = None # e.g. "Berline"


class DriverPricingDefaults(RateFields):
    ride_vat_rate: Optional[Amount] = None
    waiting_vat_rate: Optional[Amount] = None


class EffectiveRates(BaseModel):
    """Every rate resolved to a concrete value (vehicle > driver > fallback)."""
    model_config = ConfigDict(frozen=True)

    base_price_per_km: float
    night_rate_enabled: bool
    night_rate_start: str
    night_rate_end: str
    night_rate_percentage: float
    holiday_sunday_percentage: float
    minimum_trip_fare: float
    min_trip_distance_km: float
    wait_price_per_15_min: float
    wait_night_enabled: bool
    wait_night_start: str
    wait_night_end: str
    wait_night_percentage: float
    ride_vat_rate: float
    waiting_vat_rate: float


class TripLeg(BaseModel):
    start: datetime
    distance_km: Amount
    duration_minutes: Amount

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)


class WaitInterval(BaseModel):
    start: datetime
    minutes: Annotated[int, Field(ge=0)]


class TripInput(BaseModel):
    """What the driver typed in the quote form, plus route service results."""
    selected_vehicle_id: Optional[str] = None
    departure: datetime
    distance_km: float = 0.0
    duration_minutes: Amount = 0.0
    has_return_trip: bool = False
    return_to_same_address: bool = True
    return_distance_km: Amount = 0.0
    return_duration_minutes: Amount = 0.0
    has_waiting_time: bool = False
    waiting_time_minutes: Annotated[int, Field(ge=0)] = 0


class TripSchedule(BaseModel):
    outbound: TripLeg
    wait: Optional[WaitInterval] = None
    return_leg: Optional[TripLeg] = None
    trip_end_time: datetime
    wait_end_time: datetime
    return_end_time: Optional[datetime] = None


class QuoteDetails(BaseModel):
    """Fully itemized quote. HT = pre-tax, no suffix = tax-inclusive."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=AliasGenerator(serialization_alias=presentation_alias),
    )

    base_price: float

    # Outbound leg
    day_km: float
    night_km: float
    total_km: float
    day_price: float
    night_price: float
    night_surcharge: float
    is_night_rate: bool
    night_rate_percentage: float
    night_minutes: int
    total_minutes: int
    night_hours: float
    day_hours: float
    night_start_display: str
    night_end_display: str

    # Return leg
    return_day_km: float = 0.0
    return_night_km: float = 0.0
    return_total_km: float = 0.0
    return_day_price: float = 0.0
    return_night_price: float = 0.0
    return_night_surcharge: float = 0.0
    is_return_night_rate: bool = False
    return_night_minutes: int = 0
    return_total_minutes: int = 0

    # Sunday
    is_sunday: bool
    sunday_rate: float
    sunday_surcharge: float

    # Waiting time (minutes / prices HT)
    wait_time_day: int = 0
    wait_time_night: int = 0
    wait_price_day: float = 0.0
    wait_price_night: float = 0.0

    # Totals
    one_way_price_ht: float
    one_way_price: float
    return_price_ht: float
    return_price: float
    waiting_time_price_ht: float
    waiting_time_price: float
    total_price_ht: float
    total_vat: float
    total_price: float
    ride_vat_rate: float
    waiting_vat_rate: float
    minimum_fare_applied: bool = False

    has_min_distance_warning: bool
    min_distance: float

    departure_time: datetime
    trip_end_time: datetime
    wait_end_time: datetime
    return_end_time: Optional[datetime] = None
