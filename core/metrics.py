from typing import List, Sequence, Tuple

from .models import Job, QueueMetrics, SimulationMetrics


def _mean(xs: Sequence[float]) -> float:
    return sum(xs) / len(xs) if xs else 0.0


def per_job_series(completed: List[Job]) -> SimulationMetrics:
    # response == wait: service is non-preemptive, so first service is the only service
    waits = [j.start_time - j.arrival_time for j in completed]
    return SimulationMetrics(
        turnaround_times=[j.end_time - j.arrival_time for j in completed],
        wait_times=waits,
        response_times=list(waits),
        service_times=[j.service_time for j in completed],
        arrival_times=[j.arrival_time for j in completed]
    )


def summarize(completed: List[Job],
              servers: int,
              final_clock: float,
              busy_time: Sequence[float],
              idle_time: Sequence[float]) -> Tuple[QueueMetrics, SimulationMetrics]:
    """
    Queue metrics from the completed jobs and the per-server busy/idle time.

      Wq = mean wait, Ws = mean time in system
      lambda = completed / final_clock
      Lq = lambda * Wq, Ls = lambda * Ws   (Little's law)
      utilization = busy / (c * final_clock)
    """
    series = per_job_series(completed)

    if not completed or final_clock <= 0:
        return QueueMetrics(lq=0.0, ls=0.0, wq=0.0, ws=0.0, idle_time=0.0, utilization=0.0), series

    wq = _mean(series.wait_times)
    ws = _mean(series.turnaround_times)
    arrival_rate = len(completed) / final_clock
    capacity = servers * final_clock

    return QueueMetrics(
        lq=arrival_rate * wq,
        ls=arrival_rate * ws,
        wq=wq,
        ws=ws,
        idle_time=sum(idle_time) / capacity,
        utilization=sum(busy_time) / capacity
    ), series
