"""Configuration for credentoor."""

from dataclasses import dataclass

from .spec.constants import DEFAULT_MAX_DISTANCE


@dataclass
class Config:
    """Tool configuration."""

    connection: str = "http://localhost:5052"
    offline_preparation_path: str = ""
    output_path: str = ""
    withdrawal_address: str = ""
    max_distance: int = DEFAULT_MAX_DISTANCE
    timeout: float = 60.0
    log_level: str = "INFO"
    offline: bool = False
    submit: bool = False
