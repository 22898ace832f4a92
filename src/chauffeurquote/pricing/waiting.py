import logging
from datetime import datetime

from pydantic import BaseModel

from ..utils.time_utils import TimeUtils

logger = logging.getLogger(__name__)


class WaitingTimePrice(BaseModel):
    wait_time_day: int = 0
    wait_time_night: int = 0
    wait_price_day: float = 0.0
    wait_price_night: float = 0.0
    total_ht: float = 0.0
    wait_end_time: datetime


def price_waiting_time(waiting_minutes: int, wait_start: datetime, price_per_15_min: float,
                       wait_night_enabled: bool, wait_night_start: str, wait_night_end: str,
                       wait_night_percentage: float, enabled: bool = True) -> WaitingTimePrice:
    """
    Price a wait at a per-minute rate derived from the 15-minute rate.
    Minutes inside the waiting night window carry the waiting night percentage.
    """
    if not enabled or waiting_minutes <= 0:
        return WaitingTimePrice(wait_end_time=wait_start)

    wait_end_time = TimeUtils.add_minutes(wait_start, waiting_minutes)
    price_per_minute = price_per_15_min / 15

    if not wait_night_enabled:
        total = waiting_minutes * price_per_minute
        return WaitingTimePrice(
            wait_time_day=waiting_minutes,
            wait_price_day=total,
            total_ht=total,
            wait_end_time=wait_end_time,
        )

    night_minutes = TimeUtils.night_minutes_in_interval(
        wait_start, waiting_minutes, wait_night_start, wait_night_end
    )
    day_minutes = waiting_minutes - night_minutes
    day_price = day_minutes * price_per_minute
    night_price = night_minutes * price_per_minute * (1 + wait_night_percentage / 100)

    logger.debug(
        f"Waiting {waiting_minutes}min from {wait_start:%H:%M}: "
        f"{day_minutes}min day, {night_minutes}min night"
    )
    return WaitingTimePrice(
        wait_time_day=day_minutes,
        wait_time_night=night_minutes,
        wait_price_day=day_price,
        wait_price_night=night_price,
        total_ht=day_price + night_price,
        wait_end_time=wait_end_time,
    )
