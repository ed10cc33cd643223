################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Time-dependent correlation between sensor model adjustable parameters."""

from __future__ import annotations

from sensor_correlation.correlation_types import CorrelationBoundsError
from sensor_correlation.correlation_types import CorrelationErrorKind
from sensor_correlation.correlation_types import CorrelationIndexError
from sensor_correlation.correlation_types import CorrelationModelError
from sensor_correlation.correlation_types import CurveParameters
from sensor_correlation.models import FORMAT_LABEL
from sensor_correlation.models import FourParameterCorrelationModel
from sensor_correlation.models import parameter_correlation
from sensor_correlation.models import parameter_correlation_matrix


__all__ = [
    "CorrelationBoundsError",
    "CorrelationErrorKind",
    "CorrelationIndexError",
    "CorrelationModelError",
    "CurveParameters",
    "FORMAT_LABEL",
    "FourParameterCorrelationModel",
    "parameter_correlation",
    "parameter_correlation_matrix",
]
