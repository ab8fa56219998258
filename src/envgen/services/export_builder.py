"""
Environment lookup for candidate keys.

Keys that the environment does not define are dropped without a
placeholder or warning: only variables the environment actually
defines end up in the generated file.
"""

import os
from typing import Iterable, Mapping, Optional

from ..domain.types import EnvironmentSnapshot, ExportSet


def take_environment_snapshot(environ: Optional[Mapping[str, str]] = None) -> EnvironmentSnapshot:
    """
    Copy the environment once so later changes do not affect a run.

    Args:
        environ: Mapping to copy; defaults to os.environ

    Returns:
        Plain dict copy of the mapping
    """
    return dict(os.environ if environ is None else environ)


def build_export_set(keys: Iterable[str], environment: EnvironmentSnapshot) -> ExportSet:
    """
    Look up each key in the environment snapshot.

    A repeated key keeps the position of its first occurrence and
    takes the value of its last lookup.

    Args:
        keys: Candidate keys in template order
        environment: Snapshot to look keys up in

    Returns:
        Ordered mapping of the keys found in the snapshot
    """
    export_set: ExportSet = {}
    for key in keys:
        if key in environment:
            export_set[key] = environment[key]
    return export_set
