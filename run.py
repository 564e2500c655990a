# run.py

import logging

from core.models import SimulationConfig
from core.simulation import simulate
from core.analytical import solve_analytical

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# =====================================================
# 1. Simulation (M/M/c)
# =====================================================
config = SimulationConfig.for_model(
    "M/M/C",
    arrival_mean=1.0 / 0.6,
    service_mean=1.0,
    servers=2,
    n_jobs=1000,
    seed=42
)

res = simulate(config)

print("=== Simulation (first 5 jobs) ===")
for job in res.jobs[:5]:
    print(job)

print("Queue metrics:", res.queue_metrics)
print("Server 0 timeline:", res.server_activity[0].jobs[:5])

# =====================================================
# 2. Analytical reference for the same system
# =====================================================
print("\n=== Analytical M/M/c ===")
print(solve_analytical(config))

# =====================================================
# 3. G/G/c with priorities and a time horizon
# =====================================================
print("\n=== G/G/c (gamma arrivals, normal service, priority) ===")
ggc = SimulationConfig.for_model(
    "G/G/C",
    arrival_mean=1.0,
    service_mean=1.6,
    servers=2,
    priority_enabled=True,
    arrival_distribution="Gamma",
    service_distribution="Normal",
    n_jobs=500,
    time_horizon=300.0,
    seed=7
)
ggc_res = simulate(ggc)
print("Queue metrics:", ggc_res.queue_metrics)
print("Truncated:", ggc_res.truncated, "unfinished:", ggc_res.unfinished_jobs)
print(solve_analytical(ggc))
