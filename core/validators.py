import math

from .config import DISTRIBUTIONS, MAX_JOBS


class ConfigurationError(ValueError):
    """Raised when simulation parameters are rejected before a run starts."""


def require_positive(name: str, value: float) -> None:
    if value is None or not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a finite number > 0")

def require_non_negative(name: str, value: float) -> None:
    # inf is allowed (no limit), NaN is not
    if value is None or math.isnan(value) or value < 0:
        raise ConfigurationError(f"{name} must be >= 0")

def require_int_at_least(name: str, value: int, minimum: int) -> None:
    # bool is an int subclass; True servers is not a server count
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ConfigurationError(f"{name} must be an integer >= {minimum}")

def require_choice(name: str, value, choices) -> None:
    if value not in choices:
        raise ConfigurationError(f"{name} must be one of {', '.join(choices)} (got {value!r})")


def validate_config(config) -> None:
    """
    Reject malformed configurations before the event loop starts.
    Nothing is clamped: the first bad field raises ConfigurationError.
    """
    require_positive("arrival_mean", config.arrival_mean)
    require_positive("service_mean", config.service_mean)
    require_int_at_least("servers", config.servers, 1)
    require_int_at_least("n_jobs", config.n_jobs, 1)
    if config.n_jobs > MAX_JOBS:
        raise ConfigurationError(f"n_jobs must be <= {MAX_JOBS}")
    require_non_negative("time_horizon", config.time_horizon)
    require_choice("arrival_distribution", config.arrival_distribution, DISTRIBUTIONS)
    require_choice("service_distribution", config.service_distribution, DISTRIBUTIONS)
