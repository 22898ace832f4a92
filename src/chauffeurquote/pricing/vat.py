from pydantic import BaseModel

DEFAULT_RIDE_VAT_RATE = 10.0
DEFAULT_WAITING_VAT_RATE = 20.0


class VatBreakdown(BaseModel):
    one_way_price: float
    return_price: float
    waiting_time_price: float
    ride_vat: float
    waiting_vat: float
    total_price_ht: float
    total_vat: float
    total_price: float


def apply_vat(one_way_price_ht: float, return_price_ht: float, waiting_time_price_ht: float,
              ride_vat_rate: float = DEFAULT_RIDE_VAT_RATE,
              waiting_vat_rate: float = DEFAULT_WAITING_VAT_RATE) -> VatBreakdown:
    """Rides and waiting time are taxed at their own rates."""
    ride_factor = 1 + ride_vat_rate / 100
    waiting_factor = 1 + waiting_vat_rate / 100

    ride_vat = (one_way_price_ht + return_price_ht) * ride_vat_rate / 100
    waiting_vat = waiting_time_price_ht * waiting_vat_rate / 100
    total_price_ht = one_way_price_ht + return_price_ht + waiting_time_price_ht
    total_vat = ride_vat + waiting_vat

    return VatBreakdown(
        one_way_price=one_way_price_ht * ride_factor,
        return_price=return_price_ht * ride_factor,
        waiting_time_price=waiting_time_price_ht * waiting_factor,
        ride_vat=ride_vat,
        waiting_vat=waiting_vat,
        total_price_ht=total_price_ht,
        total_vat=total_vat,
        total_price=total_price_ht + total_vat,
    )
