################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Four-parameter correlation curve values."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from dataclasses import replace
from typing import Any

from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationBoundsError,
)


# Lower bound on the correlation amplitude A
A_MIN: float = 0.0
# Upper bound on the correlation amplitude A
A_MAX: float = 1.0
# Lower bound on the long-term correlation fraction alpha
ALPHA_MIN: float = 0.0
# Upper bound on the long-term correlation fraction alpha
ALPHA_MAX: float = 1.0
# Lower bound on the decay shape beta
BETA_MIN: float = 0.0
# Upper bound on the decay shape beta
BETA_MAX: float = 10.0


def _require_real(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a real number")
    return float(value)


@dataclass(frozen=True)
class CurveParameters:
    """Correlation curve constants for one parameter group.

    The curve evaluated for a time separation dt is

        rho(dt) = a * (alpha + (1 - alpha) * (1 + beta) / (beta + exp(|dt| / tau)))

    The all-zero default is representable so unset groups have a value, but it
    does not satisfy the bounds and must be replaced before evaluation.

    Attributes:
        a: Correlation amplitude, in [0, 1]
        alpha: Long-term correlation fraction, in [0, 1]
        beta: Decay shape, in [0, 10]
        tau: Decay time constant, positive, in the caller's time units
    """

    a: float = 0.0
    alpha: float = 0.0
    beta: float = 0.0
    tau: float = 0.0

    def __post_init__(self) -> None:
        """Coerce curve constants to floats."""
        object.__setattr__(self, "a", _require_real(self.a, "a"))
        object.__setattr__(self, "alpha", _require_real(self.alpha, "alpha"))
        object.__setattr__(self, "beta", _require_real(self.beta, "beta"))
        object.__setattr__(self, "tau", _require_real(self.tau, "tau"))

    def validate(self, function: str = "validate") -> None:
        """Check each constant against its bound in the order a, alpha, beta, tau.

        Comparisons are written so that NaN fails every check.

        Raises:
            CorrelationBoundsError: naming the first field out of bounds
        """
        if not A_MIN <= self.a <= A_MAX:
            raise CorrelationBoundsError(
                "Correlation parameter A must be in the range [0, 1].",
                function=function,
                field="a",
                value=self.a,
            )
        if not ALPHA_MIN <= self.alpha <= ALPHA_MAX:
            raise CorrelationBoundsError(
                "Correlation parameter alpha must be in the range [0, 1].",
                function=function,
                field="alpha",
                value=self.alpha,
            )
        if not BETA_MIN <= self.beta <= BETA_MAX:
            raise CorrelationBoundsError(
                "Correlation parameter beta must be in the range [0, 10].",
                function=function,
                field="beta",
                value=self.beta,
            )
        if not self.tau > 0.0:
            raise CorrelationBoundsError(
                "Correlation parameter tau must be positive.",
                function=function,
                field="tau",
                value=self.tau,
            )

    def is_valid(self) -> bool:
        """Return True if every constant is within its bound."""
        try:
            self.validate()
        except CorrelationBoundsError:
            return False
        return True

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return the constants as (a, alpha, beta, tau)."""
        return (self.a, self.alpha, self.beta, self.tau)

    def replace(self, **kwargs: Any) -> CurveParameters:
        """Return a copy with updated fields."""
        return replace(self, **kwargs)
