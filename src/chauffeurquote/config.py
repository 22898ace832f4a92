import os
import re
from pathlib import Path
from typing import Optional, List
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml
from dotenv import load_dotenv

from .models import DriverPricingDefaults, VehicleRateProfile


class DefaultSettings(BaseModel):
    vehicle: Optional[str] = None  # vehicle id used when --vehicle is omitted
    average_speed_kmh: float = Field(default=50.0, gt=0)  # duration estimate without route data


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file: Optional[str] = None


class Config(BaseSettings):
    driver: DriverPricingDefaults = DriverPricingDefaults()
    vehicles: List[VehicleRateProfile] = []
    defaults: DefaultSettings = DefaultSettings()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(env_prefix="QUOTE_")

    @classmethod
    def load(cls, config_path: Path = None) -> "Config":
        """Load config from file with env var substitution"""
        load_dotenv()

        if config_path is None:
            config_path = Path("config.yaml")

        if config_path.exists():
            with open(config_path) as f:
                content = f.read()

            # Substitute ${VAR} with environment variables
            def replace_env(match):
                var_name = match.group(1)
                return os.environ.get(var_name, match.group(0))

            content = re.sub(r'\$\{(\w+)\}', replace_env, content)
            data = yaml.safe_load(content) or {}
            config = cls(**data)
        else:
            # Fall back to environment variables only
            config = cls()

        # Manual fallback for VAT rates if not set via yaml
        if config.driver.ride_vat_rate is None and os.environ.get("QUOTE_RIDE_VAT_RATE"):
            config.driver.ride_vat_rate = float(os.environ["QUOTE_RIDE_VAT_RATE"])
        if config.driver.waiting_vat_rate is None and os.environ.get("QUOTE_WAITING_VAT_RATE"):
            config.driver.waiting_vat_rate = float(os.environ["QUOTE_WAITING_VAT_RATE"])

        # Add default vehicle if none exists
        if not config.vehicles:
            config.vehicles = [
                VehicleRateProfile(id="berline", name="Berline")  # driver defaults apply
            ]

        return config

    def default_vehicle_id(self) -> Optional[str]:
        if self.defaults.vehicle:
            return self.defaults.vehicle
        return self.vehicles[0].id if self.vehicles else None
