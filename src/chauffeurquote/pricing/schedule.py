from ..models import TripInput, TripLeg, TripSchedule, WaitInterval
from ..utils.time_utils import TimeUtils


def plan_trip(trip: TripInput) -> TripSchedule:
    """
    Lay the legs out on the clock: wait starts on arrival, the return leg
    starts when the wait ends (or on arrival when there is no wait).
    """
    outbound = TripLeg(
        start=trip.departure,
        distance_km=max(trip.distance_km, 0.0),
        duration_minutes=trip.duration_minutes,
    )
    trip_end_time = outbound.end

    wait = None
    wait_end_time = trip_end_time
    if trip.has_waiting_time and trip.waiting_time_minutes > 0:
        wait = WaitInterval(start=trip_end_time, minutes=trip.waiting_time_minutes)
        wait_end_time = TimeUtils.add_minutes(trip_end_time, trip.waiting_time_minutes)

    return_leg = None
    return_end_time = None
    if trip.has_return_trip:
        if trip.return_to_same_address:
            distance, duration = outbound.distance_km, outbound.duration_minutes
        else:
            distance, duration = trip.return_distance_km, trip.return_duration_minutes
        return_leg = TripLeg(start=wait_end_time, distance_km=distance, duration_minutes=duration)
        return_end_time = return_leg.end

    return TripSchedule(
        outbound=outbound,
        wait=wait,
        return_leg=return_leg,
        trip_end_time=trip_end_time,
        wait_end_time=wait_end_time,
        return_end_time=return_end_time,
    )
