import json
import logging
from datetime import datetime
from typing import Any, Dict

from ..models import QuoteDetails, TripInput

logger = logging.getLogger(__name__)

# Trip metadata stored next to the priced fields
TRIP_FIELDS = {
    "vehicle_id": "selected_vehicle_id",
    "ride_date": "departure",
    "distance_km": "distance_km",
    "duration_minutes": "duration_minutes",
    "has_return_trip": "has_return_trip",
    "return_to_same_address": "return_to_same_address",
    "return_distance_km": "return_distance_km",
    "return_duration_minutes": "return_duration_minutes",
    "has_waiting_time": "has_waiting_time",
    "waiting_time_minutes": "waiting_time_minutes",
}


def json_serial(obj):
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Type {type(obj)} not serializable")


def to_record(details: QuoteDetails, trip: TripInput) -> Dict[str, Any]:
    """
    Denormalized record for the persistence layer: trip metadata plus every
    quote field under its snake_case column name (day_km, one_way_price_ht, ...).
    """
    record = {column: getattr(trip, field) for column, field in TRIP_FIELDS.items()}
    record.update(details.model_dump())
    return record


def from_record(record: Dict[str, Any]) -> QuoteDetails:
    """Rebuild the QuoteDetails from a stored record (ISO strings parse back to datetime)."""
    data = {name: record[name] for name in QuoteDetails.model_fields if name in record}
    return QuoteDetails.model_validate(data)


def trip_from_record(record: Dict[str, Any]) -> TripInput:
    return TripInput(**{field: record[column] for column, field in TRIP_FIELDS.items() if column in record})


def dumps_record(record: Dict[str, Any]) -> str:
    return json.dumps(record, default=json_serial, indent=2)


def loads_record(content: str) -> Dict[str, Any]:
    record = json.loads(content)
    logger.debug(f"Loaded quote record with {len(record)} fields")
    return record
