from dataclasses import dataclass
from typing import Optional

from .distributions import mean_variance
from .models import SimulationConfig
from .validators import validate_config

INF = float("inf")


def _round(x: float) -> float:
    # 4 decimals for display; infinity passes through
    return x if x == INF else round(float(x), 4)


@dataclass
class AnalyticalResult:
    interarrival_rate: float  # lambda = 1 / arrival_mean
    service_rate: float       # mu = 1 / service_mean
    utilization: float        # rho = lambda / (c * mu)
    var_services: float
    var_interarrivals: float
    lq: float
    wq: float
    ws: float
    ls: float
    exact: bool               # False = Allen-Cunneen approximation
    note: Optional[str] = None


def erlang_b(offered_load: float, servers: int) -> float:
    """
    Blocking probability of an M/M/c/c loss system, by the recursion
      B(0) = 1,  B(n) = a*B(n-1) / (n + a*B(n-1))
    Every step stays in [0, 1], so it is safe for any number of servers.
    """
    b = 1.0
    for n in range(1, servers + 1):
        b = offered_load * b / (n + offered_load * b)
    return b


def erlang_c(offered_load: float, servers: int) -> float:
    """Probability that an arriving job has to wait in M/M/c (requires rho < 1)."""
    rho = offered_load / servers
    b = erlang_b(offered_load, servers)
    return b / (1.0 - rho * (1.0 - b))


def scv(var: float, mean: float) -> float:
    # squared coefficient of variation
    return var / (mean * mean) if mean > 0 else 0.0


def solve_analytical(config: SimulationConfig) -> AnalyticalResult:
    """
    Steady-state reference values for the configured system.

      Wq(M/M/c) = Pw / (c*mu - lambda)        Pw from Erlang C
      Wq(G/G/c) ~= ((Ca^2 + Cs^2) / 2) * Wq(M/M/c)

    With exponential arrivals and service Ca^2 = Cs^2 = 1 and the factor is 1,
    so the M/M/c result is exact. Priority classes are ignored (all classes
    share one service distribution, so the overall averages match FIFO).
    """
    validate_config(config)
    c = config.servers

    mean_a, var_a = mean_variance(config.arrival_distribution, config.arrival_mean)
    mean_s, var_s = mean_variance(config.service_distribution, config.service_mean)

    lam = 1.0 / mean_a
    mu = 1.0 / mean_s
    load = lam / mu
    rho = load / c
    exact = config.arrival_distribution == "Exponential" and config.service_distribution == "Exponential"

    rates = dict(
        interarrival_rate=_round(lam),
        service_rate=_round(mu),
        utilization=_round(rho),
        var_services=_round(var_s),
        var_interarrivals=_round(var_a),
        exact=exact,
    )

    if rho >= 1:
        return AnalyticalResult(lq=INF, wq=INF, ws=INF, ls=INF,
                                note="Unstable system (λ ≥ cμ)", **rates)

    note = None
    if "Normal" in (config.arrival_distribution, config.service_distribution):
        note = "Normal times are floored at a small positive value; moments are approximate."

    factor = (scv(var_a, mean_a) + scv(var_s, mean_s)) / 2.0
    wq = factor * erlang_c(load, c) / (c * mu - lam)
    ws = wq + mean_s

    return AnalyticalResult(
        lq=_round(lam * wq),
        wq=_round(wq),
        ws=_round(ws),
        ls=_round(lam * ws),
        note=note,
        **rates
    )
