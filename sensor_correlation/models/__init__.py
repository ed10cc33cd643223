################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Correlation models for sensor model adjustable parameters."""

from __future__ import annotations

from sensor_correlation.models.four_parameter_model import FORMAT_LABEL
from sensor_correlation.models.four_parameter_model import (
    FourParameterCorrelationModel,
)
from sensor_correlation.models.parameter_correlation import parameter_correlation
from sensor_correlation.models.parameter_correlation import (
    parameter_correlation_matrix,
)


__all__ = [
    "FORMAT_LABEL",
    "FourParameterCorrelationModel",
    "parameter_correlation",
    "parameter_correlation_matrix",
]
