################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Four-parameter correlation model for sensor model adjustable parameters.

Sensor model parameters are divided into disjoint groups. The correlation
between two parameters of the same group observed dt apart is

    rho = a * (alpha + ((1 - alpha) * (1 + beta) / (beta + exp(|dt| / tau))))

and the correlation between parameters of different groups is 0. This model
stores the group of each parameter and the curve constants of each group, and
evaluates the curve. Applying the cross-group rule is left to the caller.
"""

from __future__ import annotations

import math
import numbers
from typing import Any

import numpy as np
from numpy.typing import ArrayLike
from numpy.typing import NDArray

from sensor_correlation.correlation_types.correlation_errors import (
    INDEX_NAME_CP_GROUP,
)
from sensor_correlation.correlation_types.correlation_errors import (
    INDEX_NAME_SM_PARAM,
)
from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationIndexError,
)
from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationModelError,
)
from sensor_correlation.correlation_types.curve_parameters import CurveParameters


# Format label reported for introspection
FORMAT_LABEL: str = "Four-parameter model (A, alpha, beta, tau)"

# Lower clamp applied to evaluated coefficients
RHO_MIN: float = -1.0
# Upper clamp applied to evaluated coefficients
RHO_MAX: float = 1.0


def _is_index(value: object) -> bool:
    return not isinstance(value, bool) and isinstance(value, numbers.Integral)


def _saturating_float(value: Any) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _as_delta_times(delta_time: ArrayLike) -> NDArray[np.float64]:
    try:
        return np.asarray(delta_time, dtype=np.float64)
    except OverflowError:
        # Integers beyond float range saturate to +/-inf
        values: NDArray[np.object_] = np.asarray(delta_time, dtype=object)
        return np.asarray(
            np.frompyfunc(_saturating_float, 1, 1)(values), dtype=np.float64
        )


def evaluate_curve(
    curve: CurveParameters, delta_time: ArrayLike
) -> NDArray[np.float64]:
    """Evaluate the correlation curve element-wise and clamp into [-1, 1].

    Arithmetic follows IEEE float semantics: a large |dt| / tau saturates the
    exponential to inf and the coefficient to a * alpha, and integers too large
    for a float saturate to inf the same way. Two cases produce NaN, which the
    clamp leaves unchanged: a curve that was never set (tau = 0) at dt = 0, and
    tau = inf at an infinite dt.
    """
    dt: NDArray[np.float64] = np.abs(_as_delta_times(delta_time))
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        decay: NDArray[np.float64] = np.exp(dt / curve.tau)
        rho: NDArray[np.float64] = curve.a * (
            curve.alpha
            + ((1.0 - curve.alpha) * (1.0 + curve.beta) / (curve.beta + decay))
        )
    return np.clip(rho, RHO_MIN, RHO_MAX)


class FourParameterCorrelationModel:
    """Group mapping and per-group curve constants for one sensor model.

    Both sequences are sized once at construction. Every parameter starts
    unassigned (group None) and every group starts with all-zero constants.
    """

    def __init__(self, num_sm_params: int, num_cp_groups: int) -> None:
        """Allocate the group mapping and the per-group curve constants."""
        if not _is_index(num_sm_params) or num_sm_params < 0:
            raise CorrelationModelError(
                "Number of sensor model parameters must be a non-negative int.",
                function="__init__",
            )
        if not _is_index(num_cp_groups) or num_cp_groups < 0:
            raise CorrelationModelError(
                "Number of correlation parameter groups must be a non-negative int.",
                function="__init__",
            )

        self._group_mapping: list[int | None] = [None] * int(num_sm_params)
        self._curves: list[CurveParameters] = [
            CurveParameters() for _ in range(int(num_cp_groups))
        ]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(num_sm_params={len(self._group_mapping)}, "
            f"num_cp_groups={len(self._curves)})"
        )

    def format(self) -> str:
        """Return the descriptive label of the correlation model format."""
        return FORMAT_LABEL

    def num_sensor_model_parameters(self) -> int:
        """Return the number of sensor model parameters."""
        return len(self._group_mapping)

    def num_correlation_parameter_groups(self) -> int:
        """Return the number of correlation parameter groups."""
        return len(self._curves)

    def get_group(self, sm_param_index: int) -> int | None:
        """Return the group of a sensor model parameter, or None if unassigned."""
        index: int = self._check_sm_param_index(sm_param_index, "get_group")
        return self._group_mapping[index]

    def set_group(self, sm_param_index: int, cp_group_index: int) -> None:
        """Assign a sensor model parameter to a correlation parameter group."""
        param: int = self._check_sm_param_index(sm_param_index, "set_group")
        group: int = self._check_cp_group_index(cp_group_index, "set_group")
        self._group_mapping[param] = group

    def group_members(self, cp_group_index: int) -> tuple[int, ...]:
        """Return the parameter indices assigned to a group, in ascending order."""
        group: int = self._check_cp_group_index(cp_group_index, "group_members")
        return tuple(
            index
            for index, assigned in enumerate(self._group_mapping)
            if assigned == group
        )

    def set_group_parameters(
        self,
        cp_group_index: int,
        a: float,
        alpha: float,
        beta: float,
        tau: float,
    ) -> None:
        """Set the curve constants of a group.

        Raises:
            CorrelationIndexError: if the group index is out of range
            CorrelationBoundsError: naming the first constant out of bounds,
                checked in the order a, alpha, beta, tau
        """
        group: int = self._check_cp_group_index(cp_group_index, "set_group_parameters")
        curve: CurveParameters = CurveParameters(a=a, alpha=alpha, beta=beta, tau=tau)
        curve.validate("set_group_parameters")
        self._curves[group] = curve

    def set_group_curve(self, cp_group_index: int, curve: CurveParameters) -> None:
        """Set the curve constants of a group from a CurveParameters value."""
        group: int = self._check_cp_group_index(cp_group_index, "set_group_curve")
        if not isinstance(curve, CurveParameters):
            raise CorrelationModelError(
                "curve must be CurveParameters.", function="set_group_curve"
            )
        curve.validate("set_group_curve")
        self._curves[group] = curve

    def get_group_parameters(self, cp_group_index: int) -> CurveParameters:
        """Return the curve constants stored for a group."""
        group: int = self._check_cp_group_index(cp_group_index, "get_group_parameters")
        return self._curves[group]

    def get_correlation_coefficient(
        self, cp_group_index: int, delta_time: float
    ) -> float:
        """Return the correlation coefficient of a group for a time separation."""
        group: int = self._check_cp_group_index(
            cp_group_index, "get_correlation_coefficient"
        )
        return float(evaluate_curve(self._curves[group], delta_time))

    def get_correlation_coefficients(
        self, cp_group_index: int, delta_times: ArrayLike
    ) -> NDArray[np.float64]:
        """Return correlation coefficients of a group for an array of separations."""
        group: int = self._check_cp_group_index(
            cp_group_index, "get_correlation_coefficients"
        )
        return np.asarray(evaluate_curve(self._curves[group], delta_times))

    def _check_sm_param_index(self, sm_param_index: object, function: str) -> int:
        if not _is_index(sm_param_index) or not (
            0 <= sm_param_index < len(self._group_mapping)  # type: ignore[operator]
        ):
            raise CorrelationIndexError(
                "Sensor model parameter index is out of range.",
                function=function,
                index_name=INDEX_NAME_SM_PARAM,
                index=sm_param_index,
            )
        return int(sm_param_index)  # type: ignore[call-overload]

    def _check_cp_group_index(self, cp_group_index: object, function: str) -> int:
        if not _is_index(cp_group_index) or not (
            0 <= cp_group_index < len(self._curves)  # type: ignore[operator]
        ):
            raise CorrelationIndexError(
                "Correlation parameter group index is out of range.",
                function=function,
                index_name=INDEX_NAME_CP_GROUP,
                index=cp_group_index,
            )
        return int(cp_group_index)  # type: ignore[call-overload]
