################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Type definitions for sensor model parameter correlation."""

from __future__ import annotations

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


__all__ = [
    "CorrelationBoundsError",
    "CorrelationErrorKind",
    "CorrelationIndexError",
    "CorrelationModelError",
    "CurveParameters",
]
