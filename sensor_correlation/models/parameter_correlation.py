################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Pairwise correlation between sensor model parameter observations."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike
from numpy.typing import NDArray

from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationModelError,
)
from sensor_correlation.models.four_parameter_model import (
    FourParameterCorrelationModel,
)


def parameter_correlation(
    model: FourParameterCorrelationModel,
    param_i: int,
    time_i: float,
    param_j: int,
    time_j: float,
) -> float:
    """Return the correlation between two parameters observed at two times.

    Parameters in different groups, or with no group, are uncorrelated.
    """
    group_i: int | None = model.get_group(param_i)
    group_j: int | None = model.get_group(param_j)
    if group_i is None or group_j is None or group_i != group_j:
        return 0.0
    return model.get_correlation_coefficient(group_i, time_i - time_j)


def parameter_correlation_matrix(
    model: FourParameterCorrelationModel,
    param_indices: Sequence[int],
    times: ArrayLike,
) -> NDArray[np.float64]:
    """Return the NxN correlation matrix of N (parameter, time) observations.

    Entry (i, j) is the correlation between observation i and observation j.
    Rows of unassigned parameters are all zero, including the diagonal.
    """
    times_arr: NDArray[np.float64] = np.asarray(times, dtype=np.float64)
    if times_arr.ndim != 1:
        raise CorrelationModelError(
            "times must be one-dimensional.", function="parameter_correlation_matrix"
        )
    count: int = len(param_indices)
    if times_arr.shape[0] != count:
        raise CorrelationModelError(
            "param_indices and times must have the same length.",
            function="parameter_correlation_matrix",
        )

    groups: list[int | None] = [model.get_group(index) for index in param_indices]
    matrix: NDArray[np.float64] = np.zeros((count, count), dtype=np.float64)
    dt: NDArray[np.float64] = times_arr[:, np.newaxis] - times_arr[np.newaxis, :]

    for group in sorted({group for group in groups if group is not None}):
        members: NDArray[np.intp] = np.array(
            [row for row, assigned in enumerate(groups) if assigned == group],
            dtype=np.intp,
        )
        block: tuple[NDArray[np.intp], ...] = np.ix_(members, members)
        matrix[block] = model.get_correlation_coefficients(group, dt[block])

    return matrix
