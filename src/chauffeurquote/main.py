import click
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path

from .config import Config
from .models import TripInput
from .pricing.quote import compute_quote
from .pricing.rates import resolve_rates
from .utils.formatting import describe_quote, format_price
from .utils.quote_record import dumps_record, to_record
from .utils.time_utils import TimeUtils

# Helper for unified logging and console output
def log_echo(message, nl=True):
    """Log message to file and echo to console"""
    logging.info(message.strip())
    click.echo(message, nl=nl)

def setup_logging(config):
    """
    Setup logging to file.
    Console output goes through click (log_echo), internal logs go to the file only.
    """
    log_config = config.logging
    log_file = log_config.file or "chauffeurquote.log"
    log_level = getattr(logging, log_config.level.upper(), logging.INFO)

    # Root logger configuration
    logger = logging.getLogger()
    logger.setLevel(log_level)

    # clear existing handlers
    logger.handlers = []

    # File Handler
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(log_level)
    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

@click.group()
@click.option('--config', 'config_path', type=click.Path(path_type=Path), help='Path to config.yaml')
@click.pass_context
def cli(ctx, config_path):
    """Chauffeur trip quoting tool"""
    ctx.ensure_object(dict)

    # Load config and setup logging early
    config = Config.load(config_path)
    setup_logging(config)
    ctx.obj['config'] = config

    # Log the command execution
    logging.info(f"Command executed: {' '.join(sys.argv)}")

def parse_departure(date, time_str, now):
    """Combine --date (DD-MM-YYYY or 'tomorrow') and --time (HH:MM) into one instant."""
    base_date = now
    if date:
        if date.lower() == 'tomorrow':
            base_date = now + timedelta(days=1)
        else:
            base_date = datetime.strptime(date, "%d-%m-%Y")

    if time_str:
        minutes = TimeUtils.parse_time(time_str)
        return base_date.replace(hour=0, minute=0, second=0, microsecond=0) + timedelta(minutes=minutes)
    return base_date.replace(second=0, microsecond=0)

@cli.command()
@click.option('--vehicle', help='Vehicle id (defaults to the configured default vehicle)')
@click.option('--date', help='Departure date (DD-MM-YYYY) or "tomorrow"')
@click.option('--time', 'time_str', help='Departure time (HH:MM)')
@click.option('--distance', type=float, required=True, help='Outbound distance in km')
@click.option('--duration', type=float, help='Outbound duration in minutes')
@click.option('--return', 'has_return', is_flag=True, help='Add a return trip')
@click.option('--return-distance', type=float, help='Return distance in km (defaults to outbound)')
@click.option('--return-duration', type=float, help='Return duration in minutes (defaults to outbound)')
@click.option('--wait', type=int, default=0, help='Waiting time in minutes before the return')
@click.option('--json', 'as_json', is_flag=True, help='Print the quote record as JSON')
@click.pass_context
def quote(ctx, vehicle, date, time_str, distance, duration, has_return, return_distance,
          return_duration, wait, as_json):
    """Compute a quote for a trip"""
    config = ctx.obj['config']

    try:
        departure = parse_departure(date, time_str, datetime.now())
    except ValueError:
        log_echo("Invalid date or time format. Use DD-MM-YYYY and HH:MM")
        return

    if duration is None:
        duration = distance / config.defaults.average_speed_kmh * 60

    # Either return option makes a custom return leg; the missing one falls back to the outbound leg
    custom_return = return_distance is not None or return_duration is not None
    if return_duration is None:
        return_duration = (
            return_distance / config.defaults.average_speed_kmh * 60 if return_distance is not None else duration
        )
    if return_distance is None:
        return_distance = distance

    trip = TripInput(
        selected_vehicle_id=vehicle or config.default_vehicle_id(),
        departure=departure,
        distance_km=distance,
        duration_minutes=duration,
        has_return_trip=has_return,
        return_to_same_address=not custom_return,
        return_distance_km=return_distance if custom_return else 0.0,
        return_duration_minutes=return_duration if custom_return else 0.0,
        has_waiting_time=wait > 0,
        waiting_time_minutes=max(wait, 0),
    )

    details = compute_quote(trip, config.vehicles, config.driver)
    if details is None:
        log_echo(f"Quote not computable for vehicle '{trip.selected_vehicle_id}' and {distance} km")
        return

    if as_json:
        click.echo(dumps_record(to_record(details, trip)))
        return

    log_echo(f"Quote {trip.selected_vehicle_id} - {departure.strftime('%d-%m-%Y %H:%M')}")
    log_echo("-" * 60)
    for line in describe_quote(details):
        log_echo(line)

@cli.command()
@click.pass_context
def vehicles(ctx):
    """List configured vehicles with their effective rates"""
    config = ctx.obj['config']

    log_echo(f"{'ID':<12} {'NAME':<16} {'€/KM':<8} {'NIGHT':<16} {'MIN FARE':<10} {'WAIT/15':<10}")
    log_echo("-" * 76)
    for profile in config.vehicles:
        rates = resolve_rates(profile, config.driver)
        night = (
            f"{rates.night_rate_start}-{rates.night_rate_end} +{rates.night_rate_percentage:g}%"
            if rates.night_rate_enabled else "off"
        )
        log_echo(
            f"{profile.id:<12} {profile.name or '?':<16} {rates.base_price_per_km:<8.2f} {night:<16} "
            f"{format_price(rates.minimum_trip_fare):<10} {format_price(rates.wait_price_per_15_min):<10}"
        )

if __name__ == '__main__':
    cli()
