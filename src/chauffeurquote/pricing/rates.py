from typing import Optional

from ..models import DriverPricingDefaults, EffectiveRates, VehicleRateProfile
from .vat import DEFAULT_RIDE_VAT_RATE, DEFAULT_WAITING_VAT_RATE

FALLBACK_RATES = {
    "base_price_per_km": 1.8,
    "night_rate_enabled": False,
    "night_rate_start": "20:00",
    "night_rate_end": "06:00",
    "night_rate_percentage": 0.0,
    "holiday_sunday_percentage": 0.0,
    "minimum_trip_fare": 0.0,
    "min_trip_distance_km": 0.0,
    "wait_price_per_15_min": 7.5,
    "wait_night_enabled": False,
    "wait_night_start": "20:00",
    "wait_night_end": "06:00",
    "wait_night_percentage": 10.0,
    "ride_vat_rate": DEFAULT_RIDE_VAT_RATE,
    "waiting_vat_rate": DEFAULT_WAITING_VAT_RATE,
}


def resolve_rates(vehicle: Optional[VehicleRateProfile],
                  defaults: Optional[DriverPricingDefaults]) -> EffectiveRates:
    """
    Merge the layers: vehicle override, else driver default, else fallback constant.
    Only None counts as missing; an explicit 0 or False is kept.
    """
    layers = [layer for layer in (vehicle, defaults) if layer is not None]
    resolved = {}
    for field, fallback in FALLBACK_RATES.items():
        value = None
        for layer in layers:
            value = getattr(layer, field, None)
            if value is not None:
                break
        resolved[field] = fallback if value is None else value
    return EffectiveRates(**resolved)
