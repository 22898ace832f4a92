import logging
from datetime import datetime

from pydantic import BaseModel

from ..utils.time_utils import TimeUtils

logger = logging.getLogger(__name__)


class SundaySurcharge(BaseModel):
    is_sunday: bool
    sunday_surcharge: float
    one_way_price_ht: float
    return_price_ht: float


class MinimumFare(BaseModel):
    one_way_price_ht: float
    return_price_ht: float
    applied: bool


def apply_sunday_surcharge(trip_date: datetime, holiday_sunday_percentage: float,
                           one_way_price_ht: float, return_price_ht: float) -> SundaySurcharge:
    """
    Scale both legs by the Sunday percentage when the trip date is a Sunday.
    The surcharge is reported on the combined amount before scaling.
    """
    is_sunday = TimeUtils.is_sunday(trip_date)
    if not is_sunday or holiday_sunday_percentage <= 0:
        return SundaySurcharge(
            is_sunday=is_sunday,
            sunday_surcharge=0.0,
            one_way_price_ht=one_way_price_ht,
            return_price_ht=return_price_ht,
        )

    factor = 1 + holiday_sunday_percentage / 100
    surcharge = (one_way_price_ht + return_price_ht) * holiday_sunday_percentage / 100
    logger.debug(f"Sunday surcharge {holiday_sunday_percentage}%: {surcharge:.2f}")
    return SundaySurcharge(
        is_sunday=True,
        sunday_surcharge=surcharge,
        one_way_price_ht=one_way_price_ht * factor,
        return_price_ht=return_price_ht * factor,
    )


def enforce_minimum_fare(one_way_price_ht: float, return_price_ht: float,
                         minimum_trip_fare: float) -> MinimumFare:
    """Raise the combined pre-tax total to the floor, keeping the outbound/return ratio."""
    total = one_way_price_ht + return_price_ht
    if minimum_trip_fare <= 0 or total >= minimum_trip_fare:
        return MinimumFare(one_way_price_ht=one_way_price_ht, return_price_ht=return_price_ht, applied=False)

    # Zero total is treated like a trip without a return leg: ratio 1, whole floor on the outbound leg
    ratio = one_way_price_ht / total if total > 0 else 1.0
    logger.debug(f"Minimum fare {minimum_trip_fare:.2f} applied over {total:.2f}")
    return MinimumFare(
        one_way_price_ht=minimum_trip_fare * ratio,
        return_price_ht=minimum_trip_fare * (1 - ratio),
        applied=True,
    )


def has_min_distance_warning(distance_km: float, min_trip_distance_km: float) -> bool:
    """Informational only: the price floor comes from the minimum fare."""
    return min_trip_distance_km > 0 and distance_km < min_trip_distance_km
