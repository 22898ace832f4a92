import logging
import math
from typing import Optional, Sequence, Tuple

from ..models import (
    DriverPricingDefaults,
    EffectiveRates,
    QuoteDetails,
    TripInput,
    TripLeg,
    VehicleRateProfile,
)
from ..utils.time_utils import TimeUtils
from .distance import DistanceSplit, split_distance
from .rates import resolve_rates
from .schedule import plan_trip
from .segment import SegmentPrice, price_segment
from .surcharges import apply_sunday_surcharge, enforce_minimum_fare, has_min_distance_warning
from .vat import apply_vat
from .waiting import price_waiting_time

logger = logging.getLogger(__name__)


def select_vehicle(vehicles: Sequence[VehicleRateProfile], vehicle_id: Optional[str]) -> Optional[VehicleRateProfile]:
    """Find the selected vehicle profile by id."""
    for vehicle in vehicles:
        if vehicle.id == vehicle_id:
            return vehicle
    return None


def price_leg(leg: TripLeg, rates: EffectiveRates) -> Tuple[int, int, DistanceSplit, SegmentPrice]:
    """
    Night minutes, whole minutes, km split and segment price for one leg.
    Each leg is evaluated from its own start time.
    """
    # a partial minute counts as a whole one (float noise from speed estimates dropped first)
    total_minutes = math.ceil(round(leg.duration_minutes, 6))
    night_minutes = TimeUtils.night_minutes_in_interval(
        leg.start,
        total_minutes,
        rates.night_rate_start,
        rates.night_rate_end,
        enabled=rates.night_rate_enabled,
    )
    split = split_distance(leg.distance_km, night_minutes, total_minutes)
    segment = price_segment(
        split.day_km,
        split.night_km,
        rates.base_price_per_km,
        rates.night_rate_enabled,
        rates.night_rate_percentage,
    )
    return night_minutes, total_minutes, split, segment


def assemble_quote(trip: TripInput, vehicle: Optional[VehicleRateProfile],
                   defaults: Optional[DriverPricingDefaults]) -> QuoteDetails:
    """Run every calculator for the outbound leg, the optional wait and the optional return leg."""
    rates = resolve_rates(vehicle, defaults)
    schedule = plan_trip(trip)

    night_minutes, total_minutes, split, segment = price_leg(schedule.outbound, rates)

    return_fields = {}
    return_ht = 0.0
    if schedule.return_leg is not None:
        r_night_minutes, r_total_minutes, r_split, r_segment = price_leg(schedule.return_leg, rates)
        return_ht = r_segment.total_ht
        return_fields = dict(
            return_day_km=r_split.day_km,
            return_night_km=r_split.night_km,
            return_total_km=r_split.total_km,
            return_day_price=r_segment.day_price,
            return_night_price=r_segment.night_price,
            return_night_surcharge=r_segment.night_surcharge,
            is_return_night_rate=r_segment.is_night_rate,
            return_night_minutes=r_night_minutes,
            return_total_minutes=r_total_minutes,
        )

    sunday = apply_sunday_surcharge(
        trip.departure, rates.holiday_sunday_percentage, segment.total_ht, return_ht
    )
    minimum = enforce_minimum_fare(
        sunday.one_way_price_ht, sunday.return_price_ht, rates.minimum_trip_fare
    )

    wait_start = schedule.wait.start if schedule.wait else schedule.trip_end_time
    waiting = price_waiting_time(
        trip.waiting_time_minutes,
        wait_start,
        rates.wait_price_per_15_min,
        rates.wait_night_enabled,
        rates.wait_night_start,
        rates.wait_night_end,
        rates.wait_night_percentage,
        enabled=schedule.wait is not None,
    )

    vat = apply_vat(
        minimum.one_way_price_ht,
        minimum.return_price_ht,
        waiting.total_ht,
        rates.ride_vat_rate,
        rates.waiting_vat_rate,
    )

    details = QuoteDetails(
        base_price=rates.base_price_per_km,
        day_km=split.day_km,
        night_km=split.night_km,
        total_km=split.total_km,
        day_price=segment.day_price,
        night_price=segment.night_price,
        night_surcharge=segment.night_surcharge,
        is_night_rate=segment.is_night_rate,
        night_rate_percentage=rates.night_rate_percentage if rates.night_rate_enabled else 0.0,
        night_minutes=night_minutes,
        total_minutes=total_minutes,
        night_hours=night_minutes / 60,
        day_hours=(total_minutes - night_minutes) / 60,
        night_start_display=rates.night_rate_start,
        night_end_display=rates.night_rate_end,
        **return_fields,
        is_sunday=sunday.is_sunday,
        sunday_rate=rates.holiday_sunday_percentage,
        sunday_surcharge=sunday.sunday_surcharge,
        wait_time_day=waiting.wait_time_day,
        wait_time_night=waiting.wait_time_night,
        wait_price_day=waiting.wait_price_day,
        wait_price_night=waiting.wait_price_night,
        one_way_price_ht=minimum.one_way_price_ht,
        one_way_price=vat.one_way_price,
        return_price_ht=minimum.return_price_ht,
        return_price=vat.return_price,
        waiting_time_price_ht=waiting.total_ht,
        waiting_time_price=vat.waiting_time_price,
        total_price_ht=vat.total_price_ht,
        total_vat=vat.total_vat,
        total_price=vat.total_price,
        ride_vat_rate=rates.ride_vat_rate,
        waiting_vat_rate=rates.waiting_vat_rate,
        minimum_fare_applied=minimum.applied,
        has_min_distance_warning=has_min_distance_warning(trip.distance_km, rates.min_trip_distance_km),
        min_distance=rates.min_trip_distance_km,
        departure_time=trip.departure,
        trip_end_time=schedule.trip_end_time,
        wait_end_time=waiting.wait_end_time,
        return_end_time=schedule.return_end_time,
    )
    logger.debug(
        f"Quote {vehicle.id if vehicle else '-'} {trip.departure:%d-%m-%Y %H:%M}: "
        f"HT {details.total_price_ht:.2f}, VAT {details.total_vat:.2f}, TTC {details.total_price:.2f}"
    )
    return details


def compute_quote(trip: TripInput, vehicles: Sequence[VehicleRateProfile],
                  defaults: Optional[DriverPricingDefaults] = None) -> Optional[QuoteDetails]:
    """
    Compute the quote for the selected vehicle.

    Returns None while the quote is not yet computable (no vehicle selected,
    no distance, no vehicles configured or an unknown vehicle id). None is
    "insufficient data", not an error.
    """
    if not trip.selected_vehicle_id or trip.distance_km <= 0 or not vehicles:
        logger.debug("Quote not computable yet: missing vehicle, distance or vehicle list")
        return None

    vehicle = select_vehicle(vehicles, trip.selected_vehicle_id)
    if vehicle is None:
        logger.debug(f"Vehicle {trip.selected_vehicle_id} not found in {len(vehicles)} profiles")
        return None

    return assemble_quote(trip, vehicle, defaults)
