import pytest
from datetime import datetime

@pytest.fixture
def defaults():
    from chauffeurquote.models import DriverPricingDefaults
    return DriverPricingDefaults(
        base_price_per_km=2.0,
        night_rate_enabled=True,
        night_rate_start="20:00",
        night_rate_end="06:00",
        night_rate_percentage=20,
        ride_vat_rate=10,
        waiting_vat_rate=20,
    )

@pytest.fixture
def vehicles():
    from chauffeurquote.models import VehicleRateProfile
    return [
        VehicleRateProfile(id="berline", name="Berline"),  # driver defaults only
        VehicleRateProfile(id="van", name="Van", minimum_trip_fare=30, min_trip_distance_km=10),
        VehicleRateProfile(id="eco", name="Eco", night_rate_enabled=False, holiday_sunday_percentage=15),
    ]

@pytest.fixture
def monday():
    return datetime(2025, 12, 15)  # Mon

@pytest.fixture
def sunday():
    return datetime(2025, 12, 21)  # Sun
