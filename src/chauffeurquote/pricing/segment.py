from pydantic import BaseModel


class SegmentPrice(BaseModel):
    day_price: float
    night_base_price: float
    night_surcharge: float
    night_price: float
    total_ht: float
    is_night_rate: bool


def price_segment(day_km: float, night_km: float, base_price_per_km: float,
                  night_rate_enabled: bool, night_rate_percentage: float) -> SegmentPrice:
    """Price a day/night kilometre split at the per-km rate plus the night surcharge."""
    day_price = day_km * base_price_per_km
    night_base_price = night_km * base_price_per_km

    is_night_rate = night_rate_enabled and night_km > 0
    night_surcharge = night_base_price * night_rate_percentage / 100 if is_night_rate else 0.0
    night_price = night_base_price + night_surcharge

    return SegmentPrice(
        day_price=day_price,
        night_base_price=night_base_price,
        night_surcharge=night_surcharge,
        night_price=night_price,
        total_ht=day_price + night_price,
        is_night_rate=is_night_rate,
    )
