"""Exception types shared across the service."""


class MeteorideError(Exception):
    """Base exception for the ride-safety service."""


class VehicleParseError(MeteorideError, ValueError):
    """Raised when a vehicle string is not a known category."""


class WeatherUnavailableError(MeteorideError):
    """Raised when the weather provider cannot produce an observation."""


class CacheUnavailableError(MeteorideError):
    """Raised when the response cache store cannot be reached or written."""
