################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Error types raised by the correlation group model."""

from __future__ import annotations

import enum


# Module prefix reported with every model error
MODULE_PREFIX: str = "sensor_correlation.FourParameterCorrelationModel"

# Index name for sensor model parameter indices
INDEX_NAME_SM_PARAM: str = "sm_param_index"

# Index name for correlation parameter group indices
INDEX_NAME_CP_GROUP: str = "cp_group_index"


class CorrelationErrorKind(enum.Enum):
    """
    Enumerates the kinds of correlation model failures

    Attributes:
        INDEX_OUT_OF_RANGE: A parameter or group index is outside its bound
        BOUNDS: A curve parameter value is outside its documented domain
    """

    INDEX_OUT_OF_RANGE = "index_out_of_range"
    BOUNDS = "bounds"


class CorrelationModelError(Exception):
    """Raised when a correlation model operation fails.

    Attributes:
        kind: Failure kind, or None for construction errors
        function: Name of the operation that failed
        message: Human-readable description of the failure
    """

    def __init__(
        self,
        message: str,
        *,
        function: str,
        kind: CorrelationErrorKind | None = None,
    ) -> None:
        super().__init__(f"{MODULE_PREFIX}.{function}: {message}")
        self.kind: CorrelationErrorKind | None = kind
        self.function: str = function
        self.message: str = message


class CorrelationIndexError(CorrelationModelError, IndexError):
    """Raised when a parameter or group index is out of range.

    Attributes:
        index_name: Which index was invalid, sm_param_index or cp_group_index
        index: The offending index value
    """

    def __init__(
        self, message: str, *, function: str, index_name: str, index: object
    ) -> None:
        super().__init__(
            message,
            function=function,
            kind=CorrelationErrorKind.INDEX_OUT_OF_RANGE,
        )
        self.index_name: str = index_name
        self.index: object = index


class CorrelationBoundsError(CorrelationModelError, ValueError):
    """Raised when a curve parameter violates its bound.

    Attributes:
        field: Name of the violating curve field: a, alpha, beta or tau
        value: The rejected value
    """

    def __init__(
        self, message: str, *, function: str, field: str, value: float
    ) -> None:
        super().__init__(message, function=function, kind=CorrelationErrorKind.BOUNDS)
        self.field: str = field
        self.value: float = value
