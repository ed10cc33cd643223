################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Reading and writing correlation models as YAML snapshot files.

A model file holds one snapshot as produced by
:mod:`sensor_correlation.storage.yaml_format`. Writes go through a temporary
file in the destination directory that replaces the target once flushed, so a
reader never observes a partially written model.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from sensor_correlation.models.four_parameter_model import (
    FourParameterCorrelationModel,
)
from sensor_correlation.storage.yaml_format import CorrelationSnapshotYaml
from sensor_correlation.storage.yaml_format import CorrelationYamlError
from sensor_correlation.storage.yaml_format import dumps_yaml
from sensor_correlation.storage.yaml_format import loads_yaml
from sensor_correlation.storage.yaml_format import snapshot_from_model
from sensor_correlation.storage.yaml_format import snapshot_to_model


_LOG: logging.Logger = logging.getLogger(__name__)

# File suffixes recognized as correlation model snapshots
YAML_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml"})


class CorrelationPersistenceError(Exception):
    """Raised when a correlation model file cannot be read or written."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path names a YAML snapshot file."""
    return Path(path).suffix.lower() in YAML_SUFFIXES


def _snapshot_path(path: str | os.PathLike[str]) -> Path:
    snapshot_path: Path = Path(path)
    if snapshot_path.suffix.lower() not in YAML_SUFFIXES:
        raise CorrelationPersistenceError(
            f"{snapshot_path}: correlation snapshots must use a .yaml or .yml suffix"
        )
    return snapshot_path


def _replace_file(target: Path, text: str) -> None:
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_yaml_snapshot(
    path: str | os.PathLike[str],
    snapshot: CorrelationSnapshotYaml,
    *,
    atomic_write: bool = True,
) -> None:
    """Write a snapshot to a YAML file, creating parent directories.

    With atomic_write disabled the target is written in place.
    """
    target: Path = _snapshot_path(path)
    text: str = dumps_yaml(snapshot)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if atomic_write:
            _replace_file(target, text)
        else:
            target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise CorrelationPersistenceError(f"{target}: write failed: {exc}") from exc


def load_yaml_snapshot(path: str | os.PathLike[str]) -> CorrelationSnapshotYaml:
    """Read and parse a snapshot from a YAML file."""
    source: Path = _snapshot_path(path)
    try:
        return loads_yaml(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CorrelationPersistenceError(f"{source}: read failed: {exc}") from exc
    except CorrelationYamlError as exc:
        raise CorrelationPersistenceError(f"{source}: {exc}") from exc


def save_model(
    path: str | os.PathLike[str],
    model: FourParameterCorrelationModel,
    *,
    atomic_write: bool = True,
) -> None:
    """Save the group mapping and group curves of a model."""
    snapshot: CorrelationSnapshotYaml = snapshot_from_model(model)
    save_yaml_snapshot(path, snapshot, atomic_write=atomic_write)
    _LOG.debug(
        "Saved correlation model (%d parameters, %d groups, %d unset) to %s",
        snapshot.num_sm_params(),
        snapshot.num_cp_groups(),
        sum(1 for group in snapshot.groups if group is None),
        os.fspath(path),
    )


def load_model(path: str | os.PathLike[str]) -> FourParameterCorrelationModel:
    """Load a model saved by save_model.

    Curves are validated as they are applied, so a file holding an out of
    bounds curve or a mapping into a missing group is rejected.
    """
    snapshot: CorrelationSnapshotYaml = load_yaml_snapshot(path)
    try:
        model: FourParameterCorrelationModel = snapshot_to_model(snapshot)
    except CorrelationYamlError as exc:
        raise CorrelationPersistenceError(f"{os.fspath(path)}: {exc}") from exc
    _LOG.debug(
        "Loaded correlation model (%d parameters, %d groups) from %s",
        model.num_sensor_model_parameters(),
        model.num_correlation_parameter_groups(),
        os.fspath(path),
    )
    return model
