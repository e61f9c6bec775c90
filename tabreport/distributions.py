"""Simulation of fundamental probability distributions.

Draws samples with numpy's Generator API and evaluates densities and
interval probabilities with scipy. ``simulation_table`` lays samples out
in long form so each distribution becomes one tab of a report.
"""

import math
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field, field_validator, model_validator
from scipy import integrate, stats

from tabreport.const import StrEnum
from tabreport.exceptions import DistributionError


class Distribution(StrEnum):
    r"""Supported distributions."""

    NORMAL = "normal"
    UNIFORM = "uniform"
    EXPONENTIAL = "exponential"
    BINOMIAL = "binomial"
    POISSON = "poisson"

    @property
    def is_discrete(self) -> bool:
        """Check if the distribution has a probability mass function."""
        return self in {Distribution.BINOMIAL, Distribution.POISSON}


_DEFAULT_PARAMS: dict[Distribution, dict[str, float]] = {
    Distribution.NORMAL: {"mean": 0.0, "sd": 1.0},
    Distribution.UNIFORM: {"low": 0.0, "high": 1.0},
    Distribution.EXPONENTIAL: {"rate": 1.0},
    Distribution.BINOMIAL: {"n": 10, "p": 0.5},
    Distribution.POISSON: {"lam": 1.0},
}


class DistributionSpec(BaseModel):
    """A distribution together with its parameters."""

    kind: Distribution = Field(..., description="The distribution family.")
    params: dict[str, float] = Field(
        default={},
        description="Family parameters. Missing parameters take the family defaults "
        "(normal: mean, sd; uniform: low, high; exponential: rate; binomial: n, p; poisson: lam).",
    )
    label: str | None = Field(default=None, description="Display label. If None, one is built from the parameters.")

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, v: Any) -> Any:
        """Reject unknown distribution names with a DistributionError."""
        try:
            return Distribution(v)
        except ValueError as e:
            msg = f"Unknown distribution {v!r}"
            raise DistributionError(msg) from e

    @model_validator(mode="after")
    def validate_params(self) -> "DistributionSpec":
        """Fill defaults and check parameter ranges."""
        defaults = _DEFAULT_PARAMS[self.kind]
        unknown = set(self.params) - set(defaults)
        if unknown:
            msg = f"Unknown parameters for {self.kind}: {sorted(unknown)}"
            raise DistributionError(msg)
        self.params = {**defaults, **self.params}

        p = self.params
        if self.kind == Distribution.NORMAL and p["sd"] <= 0:
            msg = "normal: 'sd' must be positive"
            raise DistributionError(msg)
        if self.kind == Distribution.UNIFORM and p["low"] >= p["high"]:
            msg = "uniform: 'low' must be less than 'high'"
            raise DistributionError(msg)
        if self.kind == Distribution.EXPONENTIAL and p["rate"] <= 0:
            msg = "exponential: 'rate' must be positive"
            raise DistributionError(msg)
        if self.kind == Distribution.BINOMIAL and (p["n"] < 0 or p["n"] != int(p["n"]) or not 0 <= p["p"] <= 1):
            msg = "binomial: 'n' must be a non-negative integer and 'p' within [0, 1]"
            raise DistributionError(msg)
        if self.kind == Distribution.POISSON and p["lam"] <= 0:
            msg = "poisson: 'lam' must be positive"
            raise DistributionError(msg)
        return self

    @property
    def display_label(self) -> str:
        """Label used as the tab title."""
        if self.label:
            return self.label
        args = ", ".join(f"{name}={value:g}" for name, value in self.params.items())
        return f"{self.kind}({args})"

    def frozen(self) -> Any:
        """Get the equivalent frozen scipy.stats distribution."""
        p = self.params
        if self.kind == Distribution.NORMAL:
            return stats.norm(loc=p["mean"], scale=p["sd"])
        if self.kind == Distribution.UNIFORM:
            return stats.uniform(loc=p["low"], scale=p["high"] - p["low"])
        if self.kind == Distribution.EXPONENTIAL:
            return stats.expon(scale=1.0 / p["rate"])
        if self.kind == Distribution.BINOMIAL:
            return stats.binom(n=int(p["n"]), p=p["p"])
        return stats.poisson(mu=p["lam"])


def parse_spec(text: str) -> DistributionSpec:
    """Parse ``kind:name=value,name=value`` into a DistributionSpec.

    >>> parse_spec("normal:mean=1,sd=2").params
    {'mean': 1.0, 'sd': 2.0}
    """
    kind, _, raw_params = text.partition(":")
    params: dict[str, float] = {}
    for item in filter(None, (part.strip() for part in raw_params.split(","))):
        name, sep, value = item.partition("=")
        if not sep:
            msg = f"Invalid parameter {item!r} in {text!r}, expected name=value"
            raise DistributionError(msg)
        try:
            params[name.strip()] = float(value)
        except ValueError as e:
            msg = f"Parameter {name.strip()!r} in {text!r} is not a number"
            raise DistributionError(msg) from e
    return DistributionSpec(kind=kind.strip(), params=params)


def simulate(spec: DistributionSpec, size: int, seed: int | None = None) -> np.ndarray:
    """Draw random samples from a distribution.

    Args:
        spec: Distribution to sample
        size: Number of draws
        seed: Seed for numpy's default generator. The same seed gives the same draws.

    Returns:
        Array of ``size`` samples

    """
    if size < 0:
        msg = f"Sample size must be non-negative, got {size}"
        raise DistributionError(msg)

    rng = np.random.default_rng(seed)
    p = spec.params
    if spec.kind == Distribution.NORMAL:
        return rng.normal(p["mean"], p["sd"], size)
    if spec.kind == Distribution.UNIFORM:
        return rng.uniform(p["low"], p["high"], size)
    if spec.kind == Distribution.EXPONENTIAL:
        return rng.exponential(1.0 / p["rate"], size)
    if spec.kind == Distribution.BINOMIAL:
        return rng.binomial(int(p["n"]), p["p"], size)
    return rng.poisson(p["lam"], size)


def density(spec: DistributionSpec, x: float | np.ndarray) -> float | np.ndarray:
    """Evaluate the pdf (continuous) or pmf (discrete) at ``x``."""
    dist = spec.frozen()
    if spec.kind.is_discrete:
        return dist.pmf(x)
    return dist.pdf(x)


def interval_probability(spec: DistributionSpec, lower: float, upper: float) -> float:
    """Probability that a draw falls in ``[lower, upper]``.

    Continuous distributions integrate the pdf numerically; discrete ones
    sum the pmf over the integers in the interval. Infinite bounds are
    allowed for both.
    """
    if lower > upper:
        msg = f"Lower bound {lower} is greater than upper bound {upper}"
        raise DistributionError(msg)

    dist = spec.frozen()
    if spec.kind.is_discrete:
        support_low, support_high = dist.support()
        start = int(support_low) if lower == -math.inf else max(math.ceil(lower), int(support_low))
        top = min(upper, support_high)
        if top == math.inf:
            # Unbounded upper tail: P(X >= start).
            return float(dist.sf(start - 1))
        stop = math.floor(top)
        if start > stop:
            return 0.0
        return float(dist.pmf(np.arange(start, stop + 1)).sum())

    support_low, support_high = dist.support()
    lower, upper = max(lower, support_low), min(upper, support_high)
    if lower >= upper:
        return 0.0
    value, _ = integrate.quad(dist.pdf, lower, upper)
    return float(value)


def summarise(samples: Sequence[float] | np.ndarray) -> dict[str, float]:
    """Get mean, variance, sd, min and max of a sample."""
    values = np.asarray(samples, dtype=float)
    if values.size == 0:
        msg = "Cannot summarise an empty sample"
        raise DistributionError(msg)
    return {
        "mean": float(values.mean()),
        "variance": float(values.var(ddof=1)) if values.size > 1 else 0.0,
        "sd": float(values.std(ddof=1)) if values.size > 1 else 0.0,
        "min": float(values.min()),
        "max": float(values.max()),
    }


def _unique_labels(specs: Sequence[DistributionSpec]) -> list[str]:
    """Get one distinct label per spec, numbering repeats as ``label #2``, ``label #3``..."""
    used: set[str] = set()
    labels = []
    for spec in specs:
        label, number = spec.display_label, 1
        while label in used:
            number += 1
            label = f"{spec.display_label} #{number}"
        used.add(label)
        labels.append(label)
    return labels


def simulation_table(specs: Sequence[DistributionSpec], size: int, seed: int | None = None) -> pd.DataFrame:
    """Simulate several distributions into one long table.

    Each distribution gets its own child seed, so adding a distribution does
    not change the draws of the others. Repeated specs stay separate groups.

    Returns:
        Table with ``distribution`` and ``value`` columns, in the order of ``specs``

    """
    child_seeds = np.random.SeedSequence(seed).spawn(len(specs))
    frames = [
        pd.DataFrame(
            {
                "distribution": label,
                "value": simulate(spec, size, seed=np.random.default_rng(child).integers(2**32)),
            }
        )
        for spec, label, child in zip(specs, _unique_labels(specs), child_seeds)
    ]
    if not frames:
        return pd.DataFrame({"distribution": pd.Series(dtype=str), "value": pd.Series(dtype=float)})
    return pd.concat(frames, ignore_index=True)
