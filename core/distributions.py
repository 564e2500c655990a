import logging
import math
import random
from typing import Tuple

from .config import GAMMA_SHAPE, NORMAL_FLOOR

logger = logging.getLogger(__name__)


def _open_uniform(rng: random.Random) -> float:
    # U on the open interval (0, 1); rng.random() is [0, 1)
    u = rng.random()
    while u == 0.0:
        u = rng.random()
    return u

def sample_exponential(mean: float, rng: random.Random) -> float:
    # inverse CDF, rate = 1/mean
    return -mean * math.log(_open_uniform(rng))

def sample_uniform(a: float, b: float, rng: random.Random) -> float:
    # open interval, so Uniform[0, 2m] never yields a zero duration
    return a + (b - a) * _open_uniform(rng)

def sample_normal(mean: float, std: float, rng: random.Random) -> float:
    # Box-Muller; no floor here, callers that need durations floor it
    u = _open_uniform(rng)
    v = rng.random()
    z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
    return mean + std * z

def sample_gamma(shape: float, scale: float, rng: random.Random) -> float:
    """
    Marsaglia & Tsang (2000) squeeze method.

    For shape < 1 we sample Gamma(shape + 1) and scale the result by
    U ** (1/shape), which gives Gamma(shape).
    """
    if shape <= 0 or scale <= 0:
        raise ValueError("gamma requires shape > 0 and scale > 0")

    alpha = shape + 1.0 if shape < 1 else shape
    d = alpha - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)

    while True:
        x = sample_normal(0.0, 1.0, rng)
        v = 1.0 + c * x
        if v <= 0:
            continue
        v = v * v * v
        u = _open_uniform(rng)
        if u < 1.0 - 0.0331 * x ** 4:
            break
        if math.log(u) < 0.5 * x * x + d * (1.0 - v + math.log(v)):
            break

    value = d * v * scale
    if shape < 1:
        value *= _open_uniform(rng) ** (1.0 / shape)
    return value


def sample(distribution: str, mean: float, rng: random.Random) -> float:
    """
    Draw one non-negative value with the given mean.

    The family's other parameters are implied by the mean:
      Exponential  rate = 1/mean
      Normal       std = mean/2, floored at NORMAL_FLOOR
      Gamma        shape = 2, scale = mean/2
      Uniform      [0, 2*mean]
    Unknown names fall back to Exponential.
    """
    if distribution == "Exponential":
        return sample_exponential(mean, rng)
    if distribution == "Normal":
        return max(NORMAL_FLOOR, sample_normal(mean, mean / 2.0, rng))
    if distribution == "Gamma":
        return sample_gamma(GAMMA_SHAPE, mean / GAMMA_SHAPE, rng)
    if distribution == "Uniform":
        return sample_uniform(0.0, 2.0 * mean, rng)

    logger.debug("unknown distribution %r, falling back to Exponential", distribution)
    return sample_exponential(mean, rng)


def mean_variance(distribution: str, mean: float) -> Tuple[float, float]:
    # moments implied by sample(); the Normal floor is ignored
    if distribution == "Normal":
        var = (mean / 2.0) ** 2
    elif distribution == "Gamma":
        scale = mean / GAMMA_SHAPE
        var = GAMMA_SHAPE * (scale ** 2)
    elif distribution == "Uniform":
        var = ((2.0 * mean) ** 2) / 12.0
    else:
        var = mean * mean

    return mean, var
