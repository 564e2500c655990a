import logging
import random
from typing import List, Optional

from .engine import run_engine
from .jobs import generate_jobs
from .metrics import summarize
from .models import Job, SimulationConfig, SimulationResult
from .validators import validate_config

logger = logging.getLogger(__name__)


def simulate(config: SimulationConfig,
             rng: Optional[random.Random] = None,
             jobs: Optional[List[Job]] = None) -> SimulationResult:
    """
    One complete run: validate -> generate jobs -> event loop -> metrics.

    rng defaults to random.Random(config.seed), so every call owns its own
    generator and seeded runs replay exactly. Pass `jobs` to skip sampling
    and run a fixed arrival/service trace instead.
    """
    validate_config(config)

    if jobs is None:
        if rng is None:
            rng = random.Random(config.seed)
        jobs = generate_jobs(config, rng)

    outcome = run_engine(config, jobs)
    queue_metrics, simulation_metrics = summarize(
        outcome.completed,
        config.servers,
        outcome.clock,
        outcome.busy_time,
        outcome.idle_time
    )

    logger.info(
        "simulated %d job(s) on %d server(s): completed=%d clock=%.4f Wq=%.4f Ws=%.4f util=%.4f",
        len(jobs), config.servers, len(outcome.completed), outcome.clock,
        queue_metrics.wq, queue_metrics.ws, queue_metrics.utilization
    )

    return SimulationResult(
        queue_metrics=queue_metrics,
        simulation_metrics=simulation_metrics,
        server_activity=outcome.server_activity,
        jobs=outcome.completed,
        final_clock=outcome.clock,
        truncated=outcome.truncated,
        unfinished_jobs=outcome.unfinished
    )
