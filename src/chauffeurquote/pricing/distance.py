from pydantic import BaseModel


class DistanceSplit(BaseModel):
    day_km: float
    night_km: float
    total_km: float


def round2(value: float) -> float:
    return round(value * 100) / 100


def split_distance(total_km: float, night_minutes: int, total_minutes: int) -> DistanceSplit:
    """
    Split a leg's distance into day and night kilometres in proportion to the
    time spent inside the night window.
    """
    if total_minutes == 0 or night_minutes == 0:
        return DistanceSplit(day_km=total_km, night_km=0.0, total_km=total_km)

    night_km = round2(total_km * night_minutes / total_minutes)
    return DistanceSplit(day_km=total_km - night_km, night_km=night_km, total_km=total_km)
