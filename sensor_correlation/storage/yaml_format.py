################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""YAML schema utilities for correlation model snapshots."""

from __future__ import annotations

import numbers
from dataclasses import asdict
from dataclasses import dataclass
from typing import Any
from typing import TypeVar

import yaml

from sensor_correlation.correlation_types.correlation_errors import (
    CorrelationModelError,
)
from sensor_correlation.correlation_types.curve_parameters import CurveParameters
from sensor_correlation.models.four_parameter_model import FORMAT_LABEL
from sensor_correlation.models.four_parameter_model import (
    FourParameterCorrelationModel,
)


# Snapshot format version written by this module
FORMAT_VERSION: int = 1


class CorrelationYamlError(Exception):
    """Raised when the correlation YAML schema is invalid."""


@dataclass(frozen=True)
class GroupCurveYaml:
    """Curve constants of one group as persisted to YAML.

    Attributes:
        a: Correlation amplitude
        alpha: Long-term correlation fraction
        beta: Decay shape
        tau: Decay time constant
    """

    a: float
    alpha: float
    beta: float
    tau: float

    def __post_init__(self) -> None:
        """Validate curve values."""
        object.__setattr__(self, "a", _as_float(self.a, "a"))
        object.__setattr__(self, "alpha", _as_float(self.alpha, "alpha"))
        object.__setattr__(self, "beta", _as_float(self.beta, "beta"))
        object.__setattr__(self, "tau", _as_float(self.tau, "tau"))

    def to_curve(self) -> CurveParameters:
        """Return the constants as a CurveParameters value."""
        return CurveParameters(a=self.a, alpha=self.alpha, beta=self.beta, tau=self.tau)


@dataclass(frozen=True)
class CorrelationSnapshotYaml:
    """Top-level correlation model snapshot as persisted to YAML.

    Attributes:
        format_version: Snapshot format version, must be 1
        format: Correlation model format label
        group_mapping: Group index per sensor model parameter, None if unassigned
        groups: Curve per group, None for groups whose curve was never set
    """

    format_version: int
    format: str
    group_mapping: tuple[int | None, ...]
    groups: tuple[GroupCurveYaml | None, ...]

    def __post_init__(self) -> None:
        """Validate snapshot components and version."""
        object.__setattr__(
            self, "format_version", _as_int(self.format_version, "format_version")
        )
        if self.format_version != FORMAT_VERSION:
            raise CorrelationYamlError(f"format_version must be {FORMAT_VERSION}")
        if self.format != FORMAT_LABEL:
            raise CorrelationYamlError(f"format must be '{FORMAT_LABEL}'")

        groups: tuple[GroupCurveYaml | None, ...] = tuple(self.groups)
        for index, group in enumerate(groups):
            if group is not None and not isinstance(group, GroupCurveYaml):
                raise CorrelationYamlError(f"groups[{index}] must be GroupCurveYaml")
        object.__setattr__(self, "groups", groups)

        mapping: list[int | None] = []
        for index, entry in enumerate(self.group_mapping):
            if entry is None:
                mapping.append(None)
                continue
            group_index: int = _as_int(entry, f"group_mapping[{index}]")
            if not 0 <= group_index < len(groups):
                raise CorrelationYamlError(
                    f"group_mapping[{index}] refers to missing group {group_index}"
                )
            mapping.append(group_index)
        object.__setattr__(self, "group_mapping", tuple(mapping))

    def num_sm_params(self) -> int:
        """Return the number of sensor model parameters in the snapshot."""
        return len(self.group_mapping)

    def num_cp_groups(self) -> int:
        """Return the number of correlation parameter groups in the snapshot."""
        return len(self.groups)


def snapshot_from_model(
    model: FourParameterCorrelationModel,
) -> CorrelationSnapshotYaml:
    """Capture the group mapping and curves of a model."""
    unset: CurveParameters = CurveParameters()
    groups: list[GroupCurveYaml | None] = []
    for group_index in range(model.num_correlation_parameter_groups()):
        curve: CurveParameters = model.get_group_parameters(group_index)
        if curve == unset:
            groups.append(None)
        else:
            groups.append(
                GroupCurveYaml(
                    a=curve.a, alpha=curve.alpha, beta=curve.beta, tau=curve.tau
                )
            )
    num_sm_params: int = model.num_sensor_model_parameters()
    return CorrelationSnapshotYaml(
        format_version=FORMAT_VERSION,
        format=model.format(),
        group_mapping=tuple(model.get_group(index) for index in range(num_sm_params)),
        groups=tuple(groups),
    )


def snapshot_to_model(
    snapshot: CorrelationSnapshotYaml,
) -> FourParameterCorrelationModel:
    """Rebuild a model from a snapshot."""
    model: FourParameterCorrelationModel = FourParameterCorrelationModel(
        snapshot.num_sm_params(), snapshot.num_cp_groups()
    )
    try:
        for group_index, group in enumerate(snapshot.groups):
            if group is not None:
                model.set_group_curve(group_index, group.to_curve())
        for param_index, assigned in enumerate(snapshot.group_mapping):
            if assigned is not None:
                model.set_group(param_index, assigned)
    except CorrelationModelError as exc:
        raise CorrelationYamlError(f"Invalid snapshot: {exc}") from exc
    return model


def snapshot_to_dict(snapshot: CorrelationSnapshotYaml) -> dict[str, object]:
    """Convert a snapshot to a YAML-safe dictionary."""
    data: dict[str, object] = {
        "format_version": snapshot.format_version,
        "format": snapshot.format,
        "num_sm_params": snapshot.num_sm_params(),
        "num_cp_groups": snapshot.num_cp_groups(),
        "group_mapping": list(snapshot.group_mapping),
        "groups": [_group_to_dict(group) for group in snapshot.groups],
    }
    return data


def snapshot_from_dict(data: dict[str, object]) -> CorrelationSnapshotYaml:
    """Parse a YAML dictionary into a snapshot.

    The root must hold exactly the snapshot keys, and the declared counts must
    agree with the lengths of group_mapping and groups.
    """
    root: dict[str, object] = _expect(data, dict, "YAML root")
    _check_keys("root", root, _ROOT_KEYS)

    mapping_data: list[object] = _expect(root["group_mapping"], list, "group_mapping")
    groups_data: list[object] = _expect(root["groups"], list, "groups")
    num_sm_params: int = _as_int(root["num_sm_params"], "num_sm_params")
    num_cp_groups: int = _as_int(root["num_cp_groups"], "num_cp_groups")
    for name, declared, actual in (
        ("group_mapping", num_sm_params, mapping_data),
        ("groups", num_cp_groups, groups_data),
    ):
        if len(actual) != declared:
            raise CorrelationYamlError(
                f"{name} must have {declared} entries, got {len(actual)}"
            )

    return CorrelationSnapshotYaml(
        format_version=_as_int(root["format_version"], "format_version"),
        format=_expect(root["format"], str, "format"),
        group_mapping=tuple(mapping_data),  # type: ignore[arg-type]
        groups=tuple(
            _group_from_dict(entry, f"groups[{index}]")
            for index, entry in enumerate(groups_data)
        ),
    )


def dumps_yaml(snapshot: CorrelationSnapshotYaml) -> str:
    """Serialize a snapshot to deterministic YAML."""
    data: dict[str, object] = snapshot_to_dict(snapshot)
    return yaml.safe_dump(
        data,
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def loads_yaml(text: str) -> CorrelationSnapshotYaml:
    """Parse a snapshot from YAML text."""
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CorrelationYamlError("Malformed YAML") from exc
    return snapshot_from_dict(loaded)


# Keys of a snapshot root mapping, in the order they are written
_ROOT_KEYS: tuple[str, ...] = (
    "format_version",
    "format",
    "num_sm_params",
    "num_cp_groups",
    "group_mapping",
    "groups",
)

# Keys of one group curve mapping
_CURVE_KEYS: tuple[str, ...] = ("a", "alpha", "beta", "tau")

# Names used in messages for the container types a snapshot may hold
_TYPE_NAMES: dict[type, str] = {dict: "mapping", list: "list", str: "string"}

_T = TypeVar("_T")


def _check_keys(where: str, data: dict[str, object], expected: tuple[str, ...]) -> None:
    """Reject mappings with unknown or absent keys, reporting both at once."""
    unexpected: list[str] = sorted(str(key) for key in data if key not in expected)
    missing: list[str] = [key for key in expected if key not in data]
    problems: list[str] = []
    if unexpected:
        problems.append(f"Unexpected keys in {where}: {', '.join(unexpected)}")
    if missing:
        problems.append(f"Missing keys in {where}: {', '.join(missing)}")
    if problems:
        raise CorrelationYamlError("; ".join(problems))


def _expect(value: object, kind: type[_T], name: str) -> _T:
    if not isinstance(value, kind):
        raise CorrelationYamlError(
            f"{name} must be a {_TYPE_NAMES[kind]}, got {type(value).__name__}"
        )
    return value


def _as_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise CorrelationYamlError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _as_float(value: object, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise CorrelationYamlError(f"{name} must be a number, got {value!r}")
    return float(value)


def _group_from_dict(entry: object, where: str) -> GroupCurveYaml | None:
    """Parse one entry of the groups list; null marks a group never set."""
    if entry is None:
        return None
    data: dict[str, object] = _expect(entry, dict, where)
    _check_keys(where, data, _CURVE_KEYS)
    return GroupCurveYaml(
        **{key: _as_float(data[key], f"{where}.{key}") for key in _CURVE_KEYS}
    )


def _group_to_dict(group: GroupCurveYaml | None) -> dict[str, object] | None:
    return None if group is None else asdict(group)
