from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional

from .config import QUEUE_MODELS
from .validators import ConfigurationError

Distribution = Literal["Exponential", "Gamma", "Normal", "Uniform"]
QueueModel = Literal["M/M/C", "M/G/C", "G/G/C"]


def normalize_model(model: str) -> str:
    # "mmc", "MM/C", "M/M/c " -> "M/M/C"
    letters = (model or "").strip().upper().replace(" ", "").replace("/", "")
    m = "/".join(letters) if len(letters) == 3 else letters
    if m not in QUEUE_MODELS:
        raise ConfigurationError(f"Unknown model: {model}")
    return m


@dataclass(frozen=True)
class SimulationConfig:
    arrival_mean: float                              # mean inter-arrival time
    service_mean: float                              # mean service time
    servers: int = 1                                 # c
    priority_enabled: bool = False
    arrival_distribution: Distribution = "Exponential"
    service_distribution: Distribution = "Exponential"
    n_jobs: int = 100                                # N
    time_horizon: float = 0.0                        # 0 = run until the last job leaves
    seed: Optional[int] = None                       # None = unseeded

    @classmethod
    def for_model(cls, model: str, **params) -> "SimulationConfig":
        """
        Build a config for a Kendall-notation model.
          M/M/C: exponential arrivals and service
          M/G/C: exponential arrivals, service distribution as given
          G/G/C: both distributions as given
        """
        m = normalize_model(model)
        if m == "M/M/C":
            params["arrival_distribution"] = "Exponential"
            params["service_distribution"] = "Exponential"
        elif m == "M/G/C":
            params["arrival_distribution"] = "Exponential"
        return cls(**params)


class JobState(str, Enum):
    PENDING = "pending"
    WAITING = "waiting"
    IN_SERVICE = "in_service"
    COMPLETED = "completed"


@dataclass
class Job:
    id: int
    arrival_time: float
    service_time: float
    priority: int = 1                  # 1 = highest
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    server: Optional[int] = None
    state: JobState = JobState.PENDING

    @property
    def completion_time(self) -> float:
        return self.start_time + self.service_time


@dataclass
class TimelineEntry:
    job_id: int
    start_time: float
    end_time: float
    priority: int

@dataclass
class ServerActivity:
    server: int
    jobs: List[TimelineEntry] = field(default_factory=list)


@dataclass(frozen=True)
class QueueMetrics:
    lq: float           # average number waiting
    ls: float           # average number in system
    wq: float           # average wait in queue
    ws: float           # average time in system
    idle_time: float    # fraction of server capacity idle
    utilization: float  # fraction of server capacity busy

@dataclass(frozen=True)
class SimulationMetrics:
    turnaround_times: List[float]
    wait_times: List[float]
    response_times: List[float]
    service_times: List[float]
    arrival_times: List[float]


@dataclass(frozen=True)
class SimulationResult:
    queue_metrics: QueueMetrics
    simulation_metrics: SimulationMetrics
    server_activity: List[ServerActivity]
    jobs: List[Job]                # completed jobs, in completion order
    final_clock: float
    truncated: bool = False        # stopped by the time horizon
    unfinished_jobs: int = 0       # dropped by truncation
