################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper and model builder."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sensor_correlation.config.correlation_params import CorrelationParams
from sensor_correlation.config.correlation_params import CorrelationParamsError
from sensor_correlation.config.correlation_params import CurveParams
from sensor_correlation.config.correlation_params import GroupParams
from sensor_correlation.models.four_parameter_model import (
    FourParameterCorrelationModel,
)


_LOG: logging.Logger = logging.getLogger(__name__)


class CorrelationConfigError(Exception):
    """Raised when correlation configuration validation fails."""


@dataclass(frozen=True)
class CorrelationConfig:
    """Convenience wrapper around correlation parameters."""

    params: CorrelationParams

    def __init__(self, params: CorrelationParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    def validate(self) -> None:
        """Validate parameter invariants."""
        if not isinstance(self.params, CorrelationParams):
            raise CorrelationConfigError("params must be CorrelationParams")
        try:
            self.params.validate()
        except CorrelationParamsError as exc:
            raise CorrelationConfigError(str(exc)) from exc

    def num_sm_params(self) -> int:
        """Return the configured number of sensor model parameters."""
        return self.params.num_sm_params

    def num_cp_groups(self) -> int:
        """Return the configured number of correlation parameter groups."""
        return self.params.num_cp_groups


def build_model(config: CorrelationConfig) -> FourParameterCorrelationModel:
    """Allocate a model and apply every configured group."""
    params: CorrelationParams = config.params
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(
        params.num_sm_params, params.num_cp_groups
    )
    for group_index, group in enumerate(params.groups):
        model.set_group_curve(group_index, group.curve.to_curve())
        for member in group.members:
            model.set_group(member, group_index)

    assigned: int = sum(len(group.members) for group in params.groups)
    _LOG.info(
        "Built correlation model with %d parameters (%d assigned) in %d groups",
        params.num_sm_params,
        assigned,
        params.num_cp_groups,
    )
    return model


def config_from_model(model: FourParameterCorrelationModel) -> CorrelationConfig:
    """Capture a model's groups and curves as a validated configuration.

    Raises:
        CorrelationConfigError: if any group still holds an unset curve
    """
    groups: list[GroupParams] = [
        GroupParams(
            members=model.group_members(group_index),
            curve=CurveParams.from_curve(model.get_group_parameters(group_index)),
        )
        for group_index in range(model.num_correlation_parameter_groups())
    ]
    params: CorrelationParams = CorrelationParams(
        num_sm_params=model.num_sensor_model_parameters(),
        num_cp_groups=model.num_correlation_parameter_groups(),
        groups=tuple(groups),
    )
    return CorrelationConfig(params)
