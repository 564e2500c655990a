import os
from typing import List

# ---------- Simulation defaults ----------
DEFAULT_SEED = 123            # reproducible by default, same as the API request default
NORMAL_FLOOR = 0.001          # Normal samples never go below this
GAMMA_SHAPE = 2.0             # Gamma(mean) uses shape=2, scale=mean/2
PRIORITY_CLASSES = (1, 2, 3)  # 1 = highest
MAX_JOBS = 200000

DISTRIBUTIONS = ("Exponential", "Gamma", "Normal", "Uniform")
QUEUE_MODELS = ("M/M/C", "M/G/C", "G/G/C")


# ---------- API settings ----------
def cors_origins() -> List[str]:
    raw = os.environ.get("QUEUE_SIM_CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]
