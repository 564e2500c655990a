import random
from typing import List, Optional, Sequence

from .config import PRIORITY_CLASSES
from .distributions import sample
from .models import Job, SimulationConfig
from .validators import ConfigurationError


def generate_jobs(config: SimulationConfig, rng: random.Random) -> List[Job]:
    """Arrival stream as a renewal process: absolute time = running sum of inter-arrivals."""
    jobs: List[Job] = []
    clock = 0.0

    for i in range(config.n_jobs):
        clock += sample(config.arrival_distribution, config.arrival_mean, rng)
        service_time = sample(config.service_distribution, config.service_mean, rng)
        priority = rng.choice(PRIORITY_CLASSES) if config.priority_enabled else 1

        jobs.append(Job(id=i, arrival_time=clock, service_time=service_time, priority=priority))

    return jobs


def jobs_from_times(arrival_times: Sequence[float],
                    service_times: Sequence[float],
                    priorities: Optional[Sequence[int]] = None) -> List[Job]:
    """
    Build a job stream from exact values instead of samples (replaying a trace,
    or pinning a scenario in tests).
    """
    if len(arrival_times) != len(service_times):
        raise ConfigurationError("arrival_times and service_times must have the same length")
    if priorities is not None and len(priorities) != len(arrival_times):
        raise ConfigurationError("priorities must match arrival_times in length")
    if not arrival_times:
        raise ConfigurationError("at least one job is required")

    jobs: List[Job] = []
    previous = None
    for i, (arrival, service) in enumerate(zip(arrival_times, service_times)):
        if arrival < 0:
            raise ConfigurationError("arrival times must be >= 0")
        if previous is not None and arrival <= previous:
            raise ConfigurationError("arrival times must be strictly increasing")
        if service <= 0:
            raise ConfigurationError("service times must be > 0")
        previous = arrival

        priority = priorities[i] if priorities is not None else 1
        jobs.append(Job(id=i, arrival_time=float(arrival), service_time=float(service), priority=priority))

    return jobs
