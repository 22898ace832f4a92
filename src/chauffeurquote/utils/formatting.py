import math
from typing import List, Optional, Union

from ..models import QuoteDetails


def format_price(price: Optional[Union[float, str]]) -> str:
    """Two decimals with euro sign; missing or unparsable values show as 0.00."""
    if price is None:
        return "0.00 €"
    try:
        value = float(price)
    except ValueError:
        return "0.00 €"
    if math.isnan(value):
        return "0.00 €"
    return f"{value:.2f} €"


def format_duration(minutes: Optional[float]) -> str:
    """90 -> '1h 30min', 45 -> '45min', 120 -> '2h'"""
    if minutes is None:
        return ""
    hours, remaining = divmod(round(minutes), 60)
    if hours == 0:
        return f"{remaining}min"
    if remaining == 0:
        return f"{hours}h"
    return f"{hours}h {remaining}min"


def format_hours(hours: float) -> str:
    """2.5 -> '2h30min'"""
    full_hours, minutes = divmod(round(hours * 60), 60)
    if full_hours == 0:
        return f"{minutes}min"
    if minutes == 0:
        return f"{full_hours}h"
    return f"{full_hours}h{minutes}min"


def _km_lines(prefix: str, day_km: float, night_km: float, day_price: float, night_price: float,
              base_price: float, night_rate: bool, night_percentage: float) -> List[str]:
    lines = [f"{prefix}{day_km:.1f} km day at {base_price:.2f} €/km = {format_price(day_price)}"]
    if night_km > 0 and night_rate:
        lines.append(
            f"{prefix}{night_km:.1f} km night at {base_price:.2f} €/km +{night_percentage:g}% = {format_price(night_price)}"
        )
    elif night_km > 0:
        lines.append(f"{prefix}{night_km:.1f} km night at {base_price:.2f} €/km = {format_price(night_price)}")
    return lines


def describe_quote(details: QuoteDetails) -> List[str]:
    """Itemized breakdown lines, read straight from the quote fields."""
    lines = _km_lines(
        "", details.day_km, details.night_km, details.day_price, details.night_price,
        details.base_price, details.is_night_rate, details.night_rate_percentage,
    )
    if details.is_night_rate:
        lines.append(
            f"Night rate {details.night_start_display}-{details.night_end_display}: "
            f"{format_hours(details.night_hours)} of {format_duration(details.total_minutes)}"
        )

    if details.return_total_km > 0:
        lines.extend(_km_lines(
            "Return: ", details.return_day_km, details.return_night_km,
            details.return_day_price, details.return_night_price,
            details.base_price, details.is_return_night_rate, details.night_rate_percentage,
        ))

    if details.waiting_time_price_ht > 0:
        wait = f"Waiting time {format_duration(details.wait_time_day + details.wait_time_night)}"
        if details.wait_time_night > 0:
            wait += f" ({details.wait_time_night}min night)"
        lines.append(f"{wait}: {format_price(details.waiting_time_price_ht)}")

    if details.sunday_surcharge > 0:
        lines.append(f"Sunday surcharge ({details.sunday_rate:g}%): {format_price(details.sunday_surcharge)}")

    if details.minimum_fare_applied:
        lines.append("Minimum fare applied")

    if details.has_min_distance_warning:
        lines.append(f"Warning: below the minimum trip distance of {details.min_distance:g} km")

    lines.append(f"Total HT: {format_price(details.total_price_ht)}")
    lines.append(f"VAT: {format_price(details.total_vat)}")
    lines.append(f"Total TTC: {format_price(details.total_price)}")
    return lines
