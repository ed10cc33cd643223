################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the four-parameter correlation model."""

from __future__ import annotations

import math

import numpy as np
import pytest

from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationBoundsError,
)
from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationErrorKind,
)
from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationIndexError,
)
from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationModelError,
)
from sensor_correlation.correlation_types.curve_parameters import CurveParameters
from sensor_correlation.models.four_parameter_model import FORMAT_LABEL
from sensor_correlation.models.four_parameter_model import (
    FourParameterCorrelationModel,
)
from sensor_correlation.models.four_parameter_model import evaluate_curve


def _closed_form(a: float, alpha: float, beta: float, tau: float, dt: float) -> float:
    """Evaluate the correlation curve directly."""
    rho: float = a * (
        alpha + ((1.0 - alpha) * (1.0 + beta) / (beta + math.exp(abs(dt) / tau)))
    )
    return min(1.0, max(-1.0, rho))


def _build_example_model() -> FourParameterCorrelationModel:
    """Three parameters in two groups with group 0 configured."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(3, 2)
    model.set_group(0, 0)
    model.set_group(1, 0)
    model.set_group(2, 1)
    model.set_group_parameters(0, a=0.8, alpha=0.3, beta=1.0, tau=5.0)
    return model


def test_construct_sizes_and_format() -> None:
    """Ensure counts and the format label are fixed at construction."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(4, 3)

    assert model.num_sensor_model_parameters() == 4
    assert model.num_correlation_parameter_groups() == 3
    assert model.format() == FORMAT_LABEL
    assert model.format() == "Four-parameter model (A, alpha, beta, tau)"


def test_construct_empty_model() -> None:
    """Ensure zero counts are allowed and every index is out of range."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(0, 0)

    assert model.num_sensor_model_parameters() == 0
    assert model.num_correlation_parameter_groups() == 0
    with pytest.raises(CorrelationIndexError):
        model.get_group(0)
    with pytest.raises(CorrelationIndexError):
        model.get_correlation_coefficient(0, 0.0)


def test_construct_rejects_negative_counts() -> None:
    """Ensure negative or non-integer counts are rejected."""
    with pytest.raises(CorrelationModelError):
        FourParameterCorrelationModel(-1, 2)
    with pytest.raises(CorrelationModelError):
        FourParameterCorrelationModel(2, -1)
    with pytest.raises(CorrelationModelError):
        FourParameterCorrelationModel(2.0, 1)  # type: ignore[arg-type]


def test_fresh_model_is_unassigned_and_zeroed() -> None:
    """Ensure every parameter starts unassigned and every curve starts at zero."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(5, 2)

    for index in range(5):
        assert model.get_group(index) is None
    for group in range(2):
        assert model.get_group_parameters(group) == CurveParameters(0.0, 0.0, 0.0, 0.0)


def test_set_group_overwrites_mapping() -> None:
    """Ensure set_group stores and overwrites group assignments."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(3, 2)

    model.set_group(1, 0)
    assert model.get_group(1) == 0
    model.set_group(1, 1)
    assert model.get_group(1) == 1
    assert model.get_group(0) is None
    assert model.get_group(2) is None


def test_group_members() -> None:
    """Ensure group members are listed in ascending parameter order."""
    model: FourParameterCorrelationModel = _build_example_model()

    assert model.group_members(0) == (0, 1)
    assert model.group_members(1) == (2,)
    with pytest.raises(CorrelationIndexError):
        model.group_members(2)


def test_example_coefficient() -> None:
    """Ensure the worked example matches the closed form."""
    model: FourParameterCorrelationModel = _build_example_model()

    rho: float = model.get_correlation_coefficient(0, 5.0)

    assert rho == pytest.approx(_closed_form(0.8, 0.3, 1.0, 5.0, 5.0))
    assert rho == pytest.approx(0.8 * (0.3 + 1.4 / (1.0 + math.e)))
    assert rho == pytest.approx(0.54122, abs=1e-5)


def test_coefficient_at_zero_delta() -> None:
    """Ensure the coefficient at zero separation matches the closed form."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)
    model.set_group_parameters(0, a=0.6, alpha=0.25, beta=3.0, tau=2.0)

    expected: float = 0.6 * (0.25 + (1.0 - 0.25) * (1.0 + 3.0) / (3.0 + 1.0))

    assert model.get_correlation_coefficient(0, 0.0) == pytest.approx(expected)
    assert model.get_correlation_coefficient(0, 0.0) == pytest.approx(0.6)


def test_coefficient_is_symmetric_in_time() -> None:
    """Ensure negative and positive separations give identical coefficients."""
    model: FourParameterCorrelationModel = _build_example_model()

    for dt in (0.0, 0.1, 1.0, 5.0, 37.5, 1e6):
        assert model.get_correlation_coefficient(
            0, dt
        ) == model.get_correlation_coefficient(0, -dt)


def test_coefficient_decays_to_floor() -> None:
    """Ensure large separations approach a * alpha without overflow errors."""
    model: FourParameterCorrelationModel = _build_example_model()

    far: float = model.get_correlation_coefficient(0, 1e6)
    near: float = model.get_correlation_coefficient(0, 1.0)

    assert far == pytest.approx(0.8 * 0.3)
    assert near > far


def test_coefficient_within_unit_interval() -> None:
    """Ensure coefficients stay within [-1, 1] for valid curves."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 3)
    model.set_group_parameters(0, a=1.0, alpha=0.0, beta=0.0, tau=1e-3)
    model.set_group_parameters(1, a=1.0, alpha=1.0, beta=10.0, tau=100.0)
    model.set_group_parameters(2, a=0.0, alpha=0.5, beta=5.0, tau=1.0)

    for group in range(3):
        for dt in np.linspace(-50.0, 50.0, 41):
            rho: float = model.get_correlation_coefficient(group, float(dt))
            assert -1.0 <= rho <= 1.0


def test_coefficients_vectorized() -> None:
    """Ensure the vectorized evaluation matches the scalar evaluation."""
    model: FourParameterCorrelationModel = _build_example_model()
    delta_times: np.ndarray = np.array([[-10.0, -1.0], [0.0, 2.5]], dtype=np.float64)

    rho: np.ndarray = model.get_correlation_coefficients(0, delta_times)

    assert rho.shape == (2, 2)
    assert rho.dtype == np.float64
    for index, dt in np.ndenumerate(delta_times):
        assert rho[index] == pytest.approx(
            model.get_correlation_coefficient(0, float(dt))
        )


def test_coefficient_is_clamped() -> None:
    """Ensure curves evaluating past +/-1 are clamped to the unit interval."""
    above: CurveParameters = CurveParameters(5.0, 1.0, 0.0, 1.0)
    below: CurveParameters = CurveParameters(-5.0, 1.0, 0.0, 1.0)

    assert float(evaluate_curve(above, 0.0)) == 1.0
    assert float(evaluate_curve(below, 0.0)) == -1.0
    np.testing.assert_array_equal(
        evaluate_curve(above, np.array([0.0, 3.0, -1e9])), [1.0, 1.0, 1.0]
    )


def test_unset_curve_evaluates_to_nan_at_zero_delta() -> None:
    """Ensure an unset group yields NaN at dt = 0 and zero elsewhere."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)

    assert math.isnan(model.get_correlation_coefficient(0, 0.0))
    assert model.get_correlation_coefficient(0, 2.0) == 0.0
    assert math.isnan(float(evaluate_curve(CurveParameters(), 0.0)))


def test_infinite_tau() -> None:
    """Ensure tau = inf holds the coefficient at a except for infinite dt."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)
    model.set_group_parameters(0, a=0.6, alpha=0.2, beta=3.0, tau=math.inf)

    assert model.get_correlation_coefficient(0, 0.0) == pytest.approx(0.6)
    assert model.get_correlation_coefficient(0, 1e300) == pytest.approx(0.6)
    assert math.isnan(model.get_correlation_coefficient(0, math.inf))


def test_huge_integer_delta_saturates() -> None:
    """Ensure integer separations beyond float range decay to a * alpha."""
    model: FourParameterCorrelationModel = _build_example_model()

    assert model.get_correlation_coefficient(0, 10**400) == pytest.approx(0.24)
    assert model.get_correlation_coefficient(0, -(10**400)) == pytest.approx(0.24)


def test_set_group_parameters_boundaries_accepted() -> None:
    """Ensure the closed bounds of each constant are accepted."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)

    model.set_group_parameters(0, a=0.0, alpha=0.5, beta=1.0, tau=1.0)
    model.set_group_parameters(0, a=1.0, alpha=0.5, beta=1.0, tau=1.0)
    model.set_group_parameters(0, a=0.5, alpha=0.0, beta=1.0, tau=1.0)
    model.set_group_parameters(0, a=0.5, alpha=1.0, beta=1.0, tau=1.0)
    model.set_group_parameters(0, a=0.5, alpha=0.5, beta=0.0, tau=1.0)
    model.set_group_parameters(0, a=0.5, alpha=0.5, beta=10.0, tau=1.0)

    assert model.get_group_parameters(0) == CurveParameters(0.5, 0.5, 10.0, 1.0)


@pytest.mark.parametrize(
    ("a", "alpha", "beta", "tau", "field"),
    [
        (-0.0001, 0.5, 1.0, 1.0, "a"),
        (1.0001, 0.5, 1.0, 1.0, "a"),
        (0.5, -0.0001, 1.0, 1.0, "alpha"),
        (0.5, 1.0001, 1.0, 1.0, "alpha"),
        (0.5, 0.5, -0.0001, 1.0, "beta"),
        (0.5, 0.5, 10.0001, 1.0, "beta"),
        (0.5, 0.5, 1.0, 0.0, "tau"),
        (0.5, 0.5, 1.0, -1.0, "tau"),
        (math.nan, 0.5, 1.0, 1.0, "a"),
        (0.5, 0.5, 1.0, math.nan, "tau"),
    ],
)
def test_set_group_parameters_bounds_rejected(
    a: float, alpha: float, beta: float, tau: float, field: str
) -> None:
    """Ensure out-of-bounds constants are rejected naming the field."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)

    with pytest.raises(CorrelationBoundsError) as excinfo:
        model.set_group_parameters(0, a=a, alpha=alpha, beta=beta, tau=tau)

    assert excinfo.value.field == field
    assert excinfo.value.kind is CorrelationErrorKind.BOUNDS
    assert excinfo.value.function == "set_group_parameters"


def test_set_group_parameters_first_violation_wins() -> None:
    """Ensure bounds are checked in the order a, alpha, beta, tau."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)

    with pytest.raises(CorrelationBoundsError) as excinfo:
        model.set_group_parameters(0, a=2.0, alpha=2.0, beta=20.0, tau=-1.0)
    assert excinfo.value.field == "a"

    with pytest.raises(CorrelationBoundsError) as excinfo:
        model.set_group_parameters(0, a=0.5, alpha=2.0, beta=20.0, tau=-1.0)
    assert excinfo.value.field == "alpha"

    with pytest.raises(CorrelationBoundsError) as excinfo:
        model.set_group_parameters(0, a=0.5, alpha=0.5, beta=20.0, tau=-1.0)
    assert excinfo.value.field == "beta"


def test_bounds_messages_are_distinct() -> None:
    """Ensure each field reports its own message."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)
    messages: set[str] = set()

    for values in (
        (2.0, 0.5, 1.0, 1.0),
        (0.5, 2.0, 1.0, 1.0),
        (0.5, 0.5, 20.0, 1.0),
        (0.5, 0.5, 1.0, 0.0),
    ):
        with pytest.raises(CorrelationBoundsError) as excinfo:
            model.set_group_parameters(0, *values)
        messages.add(excinfo.value.message)

    assert len(messages) == 4


def test_failed_set_leaves_parameters_unchanged() -> None:
    """Ensure a rejected write keeps the previous curve."""
    model: FourParameterCorrelationModel = _build_example_model()
    before: CurveParameters = model.get_group_parameters(0)
    rho_before: float = model.get_correlation_coefficient(0, 3.0)

    with pytest.raises(CorrelationBoundsError):
        model.set_group_parameters(0, a=0.9, alpha=0.9, beta=1.0, tau=0.0)

    assert model.get_group_parameters(0) == before
    assert model.get_correlation_coefficient(0, 3.0) == rho_before


def test_set_group_parameters_idempotent() -> None:
    """Ensure repeating a valid write yields identical results."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 1)

    model.set_group_parameters(0, a=0.7, alpha=0.2, beta=2.0, tau=4.0)
    first_curve: CurveParameters = model.get_group_parameters(0)
    first_rho: float = model.get_correlation_coefficient(0, 1.5)
    model.set_group_parameters(0, a=0.7, alpha=0.2, beta=2.0, tau=4.0)

    assert model.get_group_parameters(0) == first_curve
    assert model.get_correlation_coefficient(0, 1.5) == first_rho


def test_set_group_curve() -> None:
    """Ensure a CurveParameters value can be stored directly."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(1, 2)
    curve: CurveParameters = CurveParameters(a=0.5, alpha=0.1, beta=0.0, tau=2.0)

    model.set_group_curve(1, curve)

    assert model.get_group_parameters(1) == curve
    with pytest.raises(CorrelationBoundsError) as excinfo:
        model.set_group_curve(1, curve.replace(beta=11.0))
    assert excinfo.value.function == "set_group_curve"
    assert model.get_group_parameters(1) == curve


def test_index_out_of_range() -> None:
    """Ensure every operation rejects an index equal to its count."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(3, 2)

    with pytest.raises(CorrelationIndexError):
        model.get_group(3)
    with pytest.raises(CorrelationIndexError):
        model.set_group(3, 0)
    with pytest.raises(CorrelationIndexError):
        model.set_group(0, 2)
    with pytest.raises(CorrelationIndexError):
        model.get_group_parameters(2)
    with pytest.raises(CorrelationIndexError):
        model.set_group_parameters(2, 0.5, 0.5, 1.0, 1.0)
    with pytest.raises(CorrelationIndexError):
        model.get_correlation_coefficient(2, 0.0)


def test_index_at_last_position_accepted() -> None:
    """Ensure every operation accepts an index one below its count."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(3, 2)

    model.set_group(2, 1)
    assert model.get_group(2) == 1
    model.set_group_parameters(1, 0.5, 0.5, 1.0, 1.0)
    assert model.get_group_parameters(1) == CurveParameters(0.5, 0.5, 1.0, 1.0)
    assert model.get_correlation_coefficient(1, 0.0) == pytest.approx(0.5)


def test_negative_and_non_integer_indices_rejected() -> None:
    """Ensure Python negative indexing is never applied."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(3, 2)

    with pytest.raises(CorrelationIndexError):
        model.get_group(-1)
    with pytest.raises(CorrelationIndexError):
        model.set_group(0, -1)
    with pytest.raises(CorrelationIndexError):
        model.get_group(True)  # type: ignore[arg-type]
    with pytest.raises(CorrelationIndexError):
        model.get_group_parameters(0.0)  # type: ignore[arg-type]

    assert model.get_group(np.int64(1)) is None


def test_index_error_details() -> None:
    """Ensure index errors identify the operation and the offending index."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(3, 2)

    with pytest.raises(CorrelationIndexError) as excinfo:
        model.set_group(1, 5)

    error: CorrelationIndexError = excinfo.value
    assert error.kind is CorrelationErrorKind.INDEX_OUT_OF_RANGE
    assert error.function == "set_group"
    assert error.index_name == "cp_group_index"
    assert error.index == 5
    assert "set_group" in str(error)
    assert isinstance(error, IndexError)

    with pytest.raises(CorrelationIndexError) as excinfo:
        model.set_group(7, 5)
    assert excinfo.value.index_name == "sm_param_index"
    assert excinfo.value.index == 7
