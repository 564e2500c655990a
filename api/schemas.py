from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from core.config import DEFAULT_SEED, MAX_JOBS


Distribution = Literal["Exponential", "Gamma", "Normal", "Uniform"]

# ---------- Request ----------
class SimulationRequest(BaseModel):
    model: str = Field("G/G/C", examples=["M/M/C", "M/G/C", "G/G/C"])
    arrival_mean: float = Field(..., gt=0)
    service_mean: float = Field(..., gt=0)
    servers: int = Field(1, ge=1)
    n_jobs: int = Field(100, ge=1, le=MAX_JOBS)
    priority_enabled: bool = False
    arrival_distribution: Distribution = "Exponential"
    service_distribution: Distribution = "Exponential"
    time_horizon: float = Field(0.0, ge=0)
    seed: Optional[int] = DEFAULT_SEED

    @model_validator(mode="after")
    def check_model(self):
        m = (self.model or "").strip().upper().replace(" ", "").replace("/", "")
        if m not in ["MMC", "MGC", "GGC"]:
            raise ValueError(f"Unknown model: {self.model}")
        return self


# ---------- Simulation ----------
class QueueMetricsOut(BaseModel):
    lq: float
    ls: float
    wq: float
    ws: float
    idle_time: float
    utilization: float

class SimulationMetricsOut(BaseModel):
    turnaround_times: List[float]
    wait_times: List[float]
    response_times: List[float]
    service_times: List[float]
    arrival_times: List[float]

class TimelineEntryOut(BaseModel):
    job_id: int
    start_time: float
    end_time: float
    priority: int

class ServerActivityOut(BaseModel):
    server: int
    jobs: List[TimelineEntryOut]

class JobOut(BaseModel):
    id: int
    arrival_time: float
    service_time: float
    priority: int
    start_time: float
    end_time: float
    server: int

class SimulationResponse(BaseModel):
    queue_metrics: QueueMetricsOut
    simulation_metrics: SimulationMetricsOut
    server_activity: List[ServerActivityOut]
    jobs: List[JobOut]
    final_clock: float
    truncated: bool
    unfinished_jobs: int


# ---------- Analytical ----------
class AnalyticalResponse(BaseModel):
    interarrival_rate: float
    service_rate: float
    utilization: float
    var_services: float
    var_interarrivals: float
    lq: Optional[float]
    wq: Optional[float]
    ws: Optional[float]
    ls: Optional[float]
    exact: bool
    note: Optional[str] = None
