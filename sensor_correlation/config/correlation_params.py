################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for sensor model parameter correlation."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from dataclasses import replace
from typing import Any

from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationBoundsError,
)
from sensor_correlation.correlation_types.curve_parameters import CurveParameters


# Number of adjustable sensor model parameters
NUM_SM_PARAMS: int = 0
# Number of correlation parameter groups
NUM_CP_GROUPS: int = 0

# Default correlation amplitude
CURVE_A: float = 1.0
# Default long-term correlation fraction
CURVE_ALPHA: float = 0.0
# Default decay shape
CURVE_BETA: float = 0.0
# Default decay time constant in seconds
CURVE_TAU_SEC: float = 1.0


class CorrelationParamsError(Exception):
    """Raised when correlation parameter validation fails."""


def _validate_count(value: int, name: str) -> None:
    """Validate a non-negative integer count."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise CorrelationParamsError(f"{name} must be an int")
    if value < 0:
        raise CorrelationParamsError(f"{name} must be non-negative")


def _validate_finite(value: float, name: str) -> None:
    """Require a finite real value."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise CorrelationParamsError(f"{name} must be a float")
    if not math.isfinite(value):
        raise CorrelationParamsError(f"{name} must be finite")


@dataclass(frozen=True)
class CurveParams:
    """Correlation curve constants for one group."""

    # Correlation amplitude in [0, 1]
    a: float = CURVE_A
    # Long-term correlation fraction in [0, 1]
    alpha: float = CURVE_ALPHA
    # Decay shape in [0, 10]
    beta: float = CURVE_BETA
    # Decay time constant in seconds
    tau: float = CURVE_TAU_SEC

    def to_curve(self) -> CurveParameters:
        """Return the constants as a CurveParameters value."""
        return CurveParameters(a=self.a, alpha=self.alpha, beta=self.beta, tau=self.tau)

    @classmethod
    def from_curve(cls, curve: CurveParameters) -> CurveParams:
        """Build curve params from a CurveParameters value."""
        return cls(a=curve.a, alpha=curve.alpha, beta=curve.beta, tau=curve.tau)


@dataclass(frozen=True)
class GroupParams:
    """Membership and curve of one correlation parameter group."""

    # Sensor model parameter indices assigned to the group
    members: tuple[int, ...] = ()
    # Correlation curve for the group
    curve: CurveParams = field(default_factory=CurveParams)

    def __post_init__(self) -> None:
        """Coerce member indices into a tuple."""
        object.__setattr__(self, "members", tuple(self.members))


@dataclass(frozen=True)
class CorrelationParams:
    """Complete configuration tree for a four-parameter correlation model."""

    # Number of adjustable sensor model parameters
    num_sm_params: int = NUM_SM_PARAMS
    # Number of correlation parameter groups
    num_cp_groups: int = NUM_CP_GROUPS
    # Per-group membership and curve, one entry per group
    groups: tuple[GroupParams, ...] = ()

    def __post_init__(self) -> None:
        """Coerce the group list into a tuple."""
        object.__setattr__(self, "groups", tuple(self.groups))

    @classmethod
    def defaults(cls) -> CorrelationParams:
        """Return the default correlation parameter tree."""
        return cls()

    @classmethod
    def uniform(
        cls,
        num_sm_params: int,
        num_cp_groups: int,
        curve: CurveParams | None = None,
    ) -> CorrelationParams:
        """Return params with empty groups that all share one curve."""
        shared: CurveParams = curve if curve is not None else CurveParams()
        return cls(
            num_sm_params=num_sm_params,
            num_cp_groups=num_cp_groups,
            groups=tuple(GroupParams(curve=shared) for _ in range(num_cp_groups)),
        )

    def replace(self, **kwargs: Any) -> CorrelationParams:
        """Return a copy with updated top-level fields."""
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the parameter tree as nested dictionaries."""
        return {
            "num_sm_params": self.num_sm_params,
            "num_cp_groups": self.num_cp_groups,
            "groups": [
                {
                    "members": list(group.members),
                    "curve": {
                        curve_field.name: getattr(group.curve, curve_field.name)
                        for curve_field in fields(CurveParams)
                    },
                }
                for group in self.groups
            ],
        }

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _validate_count(self.num_sm_params, "num_sm_params")
        _validate_count(self.num_cp_groups, "num_cp_groups")

        if len(self.groups) != self.num_cp_groups:
            raise CorrelationParamsError(
                f"groups must have {self.num_cp_groups} entries, "
                f"got {len(self.groups)}"
            )

        owner: dict[int, int] = {}
        for group_index, group in enumerate(self.groups):
            scope: str = f"groups[{group_index}]"
            if not isinstance(group, GroupParams):
                raise CorrelationParamsError(f"{scope} must be GroupParams")

            for member in group.members:
                if isinstance(member, bool) or not isinstance(
                    member, numbers.Integral
                ):
                    raise CorrelationParamsError(f"{scope}.members must be ints")
                if not 0 <= member < self.num_sm_params:
                    raise CorrelationParamsError(
                        f"{scope}.members index {member} is out of range"
                    )
                if member in owner:
                    raise CorrelationParamsError(
                        f"Parameter {member} is assigned to groups "
                        f"{owner[member]} and {group_index}"
                    )
                owner[member] = group_index

            for curve_field in fields(CurveParams):
                _validate_finite(
                    getattr(group.curve, curve_field.name),
                    f"{scope}.curve.{curve_field.name}",
                )
            try:
                group.curve.to_curve().validate()
            except CorrelationBoundsError as exc:
                raise CorrelationParamsError(
                    f"{scope}.curve.{exc.field}: {exc.message}"
                ) from exc
