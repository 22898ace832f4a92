import pytest
from datetime import datetime, timedelta
from pydantic import ValidationError
from chauffeurquote.models import TripInput
from chauffeurquote.pricing.quote import assemble_quote, compute_quote, select_vehicle
from chauffeurquote.pricing.schedule import plan_trip


def make_trip(departure, vehicle="berline", **kwargs):
    data = dict(selected_vehicle_id=vehicle, departure=departure, distance_km=100.0, duration_minutes=120)
    data.update(kwargs)
    return TripInput(**data)


def assert_invariants(details):
    assert abs(details.day_km + details.night_km - details.total_km) <= 0.01
    assert abs(details.return_day_km + details.return_night_km - details.return_total_km) <= 0.01
    assert abs(details.total_price_ht - (
        details.one_way_price_ht + details.return_price_ht + details.waiting_time_price_ht
    )) <= 0.01
    assert abs(details.total_price - (details.total_price_ht + details.total_vat)) <= 0.01


class TestNotComputable:

    def test_no_vehicle_selected(self, monday, vehicles, defaults):
        trip = make_trip(monday.replace(hour=10), vehicle=None)
        assert compute_quote(trip, vehicles, defaults) is None

    @pytest.mark.parametrize("distance", [0.0, -3.0])
    def test_no_distance(self, monday, vehicles, defaults, distance):
        trip = make_trip(monday.replace(hour=10), distance_km=distance)
        assert compute_quote(trip, vehicles, defaults) is None

    def test_no_vehicles(self, monday, defaults):
        assert compute_quote(make_trip(monday.replace(hour=10)), [], defaults) is None

    def test_unknown_vehicle(self, monday, vehicles, defaults):
        trip = make_trip(monday.replace(hour=10), vehicle="limousine")
        assert compute_quote(trip, vehicles, defaults) is None

    def test_select_vehicle(self, vehicles):
        assert select_vehicle(vehicles, "van").name == "Van"
        assert select_vehicle(vehicles, "missing") is None


class TestOutboundLeg:

    def test_night_trip(self, monday, vehicles, defaults):
        details = compute_quote(make_trip(monday.replace(hour=23)), vehicles, defaults)

        assert details.night_minutes == 120
        assert details.total_minutes == 120
        assert details.night_km == 100.0
        assert details.day_km == 0.0
        assert details.is_night_rate is True
        assert details.night_price == pytest.approx(240.0)
        assert details.night_surcharge == pytest.approx(40.0)
        assert details.one_way_price_ht == pytest.approx(240.0)
        assert details.total_vat == pytest.approx(24.0)
        assert details.total_price == pytest.approx(264.0)
        assert details.night_start_display == "20:00"
        assert details.night_end_display == "06:00"
        assert details.night_hours == 2.0
        assert_invariants(details)

    def test_trip_leaving_the_night(self, monday, vehicles, defaults):
        details = compute_quote(make_trip(monday.replace(hour=5)), vehicles, defaults)

        assert details.night_minutes == 60
        assert details.night_km == 50.0
        assert details.day_km == 50.0
        assert details.day_price == pytest.approx(100.0)
        assert details.night_price == pytest.approx(120.0)
        assert details.one_way_price_ht == pytest.approx(220.0)
        assert_invariants(details)

    def test_day_trip(self, monday, vehicles, defaults):
        details = compute_quote(make_trip(monday.replace(hour=10)), vehicles, defaults)

        assert details.is_night_rate is False
        assert details.night_surcharge == 0
        assert details.one_way_price_ht == pytest.approx(200.0)
        assert details.return_price_ht == 0
        assert details.total_price == pytest.approx(220.0)

    def test_night_rate_disabled(self, monday, vehicles, defaults):
        details = compute_quote(make_trip(monday.replace(hour=23), vehicle="eco"), vehicles, defaults)

        assert details.is_night_rate is False
        assert details.night_surcharge == 0
        assert details.night_rate_percentage == 0
        assert details.one_way_price_ht == pytest.approx(200.0)

    def test_fallback_rates_without_driver_defaults(self, monday, vehicles):
        details = compute_quote(make_trip(monday.replace(hour=23)), vehicles)

        # 1.8 €/km and night rates off
        assert details.base_price == 1.8
        assert details.is_night_rate is False
        assert details.one_way_price_ht == pytest.approx(180.0)
        assert details.ride_vat_rate == 10
        assert details.waiting_vat_rate == 20

    def test_partial_minute_inside_the_night(self, monday, vehicles, defaults):
        trip = make_trip(monday.replace(hour=5, minute=59), distance_km=1.0, duration_minutes=0.5)
        details = compute_quote(trip, vehicles, defaults)

        assert details.total_minutes == 1
        assert details.night_minutes == 1
        assert details.night_km == 1.0
        assert details.is_night_rate is True
        assert details.one_way_price_ht == pytest.approx(2.4)

    @pytest.mark.parametrize("duration, expected", [
        (1.5, 2),
        (2.5, 3),
        (10 / 50 * 60, 12),
        (59.01, 60),
    ])
    def test_fractional_duration_rounds_up(self, monday, vehicles, defaults, duration, expected):
        trip = make_trip(monday.replace(hour=10), duration_minutes=duration)
        assert compute_quote(trip, vehicles, defaults).total_minutes == expected


class TestReturnAndWaiting:

    def test_schedule(self, monday):
        trip = make_trip(
            monday.replace(hour=4), distance_km=60.0, duration_minutes=60,
            has_return_trip=True, has_waiting_time=True, waiting_time_minutes=60,
        )
        schedule = plan_trip(trip)
        assert schedule.trip_end_time == monday.replace(hour=5)
        assert schedule.wait.start == monday.replace(hour=5)
        assert schedule.wait_end_time == monday.replace(hour=6)
        assert schedule.return_leg.start == monday.replace(hour=6)
        assert schedule.return_leg.distance_km == 60.0
        assert schedule.return_end_time == monday.replace(hour=7)

    def test_schedule_custom_return(self, monday):
        trip = make_trip(
            monday.replace(hour=10), has_return_trip=True, return_to_same_address=False,
            return_distance_km=80.0, return_duration_minutes=90,
        )
        schedule = plan_trip(trip)
        assert schedule.wait is None
        assert schedule.return_leg.start == monday.replace(hour=12)
        assert schedule.return_leg.distance_km == 80.0
        assert schedule.return_end_time == monday.replace(hour=13, minute=30)

    def test_return_leg_priced_from_its_own_start(self, monday, vehicles, defaults):
        # 04:00-05:00 outbound (night), wait 05:00-06:00, 06:00-07:00 return (day)
        trip = make_trip(
            monday.replace(hour=4), distance_km=60.0, duration_minutes=60,
            has_return_trip=True, has_waiting_time=True, waiting_time_minutes=60,
        )
        details = compute_quote(trip, vehicles, defaults)

        assert details.is_night_rate is True
        assert details.night_km == 60.0
        assert details.one_way_price_ht == pytest.approx(144.0)

        assert details.is_return_night_rate is False
        assert details.return_day_km == 60.0
        assert details.return_night_km == 0.0
        assert details.return_total_km == 60.0
        assert details.return_night_surcharge == 0
        assert details.return_price_ht == pytest.approx(120.0)

        assert details.wait_time_day == 60
        assert details.waiting_time_price_ht == pytest.approx(30.0)
        assert details.total_price_ht == pytest.approx(294.0)
        assert details.total_vat == pytest.approx(26.4 + 6.0)
        assert details.total_price == pytest.approx(326.4)
        assert details.wait_end_time == monday.replace(hour=6)
        assert details.return_end_time == monday.replace(hour=7)
        assert_invariants(details)

    def test_return_leg_into_the_night(self, monday, vehicles, defaults):
        trip = make_trip(
            monday.replace(hour=18), distance_km=60.0, duration_minutes=60,
            has_return_trip=True, has_waiting_time=True, waiting_time_minutes=60,
        )
        details = compute_quote(trip, vehicles, defaults)

        assert details.is_night_rate is False
        assert details.is_return_night_rate is True
        assert details.return_night_minutes == 60
        assert details.return_night_surcharge == pytest.approx(24.0)

    def test_waiting_without_return(self, monday, vehicles, defaults):
        trip = make_trip(monday.replace(hour=10), has_waiting_time=True, waiting_time_minutes=45)
        details = compute_quote(trip, vehicles, defaults)

        assert details.waiting_time_price_ht == pytest.approx(22.5)
        assert details.waiting_time_price == pytest.approx(27.0)
        assert details.return_price_ht == 0
        assert details.wait_end_time == monday.replace(hour=12, minute=45)

    def test_waiting_flag_off_ignores_minutes(self, monday, vehicles, defaults):
        trip = make_trip(monday.replace(hour=10), has_waiting_time=False, waiting_time_minutes=45)
        details = compute_quote(trip, vehicles, defaults)
        assert details.waiting_time_price_ht == 0
        assert details.wait_end_time == details.trip_end_time


class TestSurchargesAndFloor:

    def test_sunday(self, sunday, vehicles, defaults):
        trip = make_trip(sunday.replace(hour=10), vehicle="eco", distance_km=50.0, duration_minutes=60)
        details = compute_quote(trip, vehicles, defaults)

        assert details.is_sunday is True
        assert details.sunday_rate == 15
        assert details.sunday_surcharge == pytest.approx(15.0)
        assert details.day_price == pytest.approx(100.0)
        assert details.one_way_price_ht == pytest.approx(115.0)
        assert_invariants(details)

    def test_minimum_fare_single_leg(self, monday, vehicles, defaults):
        trip = make_trip(monday.replace(hour=10), vehicle="van", distance_km=5.0, duration_minutes=10)
        details = compute_quote(trip, vehicles, defaults)

        assert details.one_way_price_ht == pytest.approx(30.0)
        assert details.minimum_fare_applied is True
        assert details.has_min_distance_warning is True
        assert details.min_distance == 10
        # the distance warning does not touch the priced distance
        assert details.total_km == 5.0

    def test_minimum_fare_split_across_legs(self, monday, vehicles, defaults):
        trip = make_trip(
            monday.replace(hour=10), vehicle="van", distance_km=4.0, duration_minutes=10,
            has_return_trip=True,
        )
        details = compute_quote(trip, vehicles, defaults)

        assert details.one_way_price_ht == pytest.approx(15.0)
        assert details.return_price_ht == pytest.approx(15.0)
        assert details.total_price_ht == pytest.approx(30.0)
        assert_invariants(details)

    def test_minimum_fare_not_needed(self, monday, vehicles, defaults):
        trip = make_trip(monday.replace(hour=10), vehicle="van", distance_km=20.0, duration_minutes=30)
        details = compute_quote(trip, vehicles, defaults)

        assert details.minimum_fare_applied is False
        assert details.has_min_distance_warning is False
        assert details.one_way_price_ht == pytest.approx(40.0)


@pytest.mark.parametrize("hour", [0, 5, 13, 19, 22])
@pytest.mark.parametrize("extras", [
    {},
    {"has_return_trip": True},
    {"has_return_trip": True, "has_waiting_time": True, "waiting_time_minutes": 95},
    {"has_return_trip": True, "return_to_same_address": False, "return_distance_km": 33.3, "return_duration_minutes": 47},
    {"duration_minutes": 1600, "distance_km": 1234.5},
])
def test_invariants(monday, sunday, vehicles, defaults, hour, extras):
    for day in (monday, sunday):
        for vehicle in ("berline", "van", "eco"):
            trip = make_trip(day.replace(hour=hour, minute=17), vehicle=vehicle, **extras)
            assert_invariants(compute_quote(trip, vehicles, defaults))


def test_deterministic(monday, vehicles, defaults):
    trip = make_trip(
        monday.replace(hour=19, minute=40), has_return_trip=True,
        has_waiting_time=True, waiting_time_minutes=30,
    )
    first = compute_quote(trip, vehicles, defaults)
    second = compute_quote(trip, vehicles, defaults)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_quote_is_immutable(monday, vehicles, defaults):
    details = compute_quote(make_trip(monday.replace(hour=10)), vehicles, defaults)
    with pytest.raises(ValidationError):
        details.total_price = 0


def test_assemble_without_vehicle_uses_defaults(monday, defaults):
    details = assemble_quote(make_trip(monday.replace(hour=10)), None, defaults)
    assert details.base_price == 2.0


def test_presentation_names(monday, vehicles, defaults):
    details = compute_quote(make_trip(monday.replace(hour=23)), vehicles, defaults)
    data = details.model_dump(by_alias=True)
    assert data["oneWayPriceHT"] == details.one_way_price_ht
    assert data["totalVAT"] == details.total_vat
    assert data["dayKm"] == details.day_km
    assert data["isReturnNightRate"] is False
    assert "one_way_price_ht" in details.model_dump()
