"""Field type inference over sampled JSON documents.

``analyze`` scans a bounded number of sample objects and builds a
:class:`~aapi.schema.models.FieldModel`.  How a field's type reacts to later,
possibly conflicting, observations is delegated to a merge strategy so that
stricter policies can be swapped in without touching the scan loop.
"""

from __future__ import annotations

import itertools
import re
from collections.abc import Callable, Sequence
from typing import Any

from aapi.config import InferenceConfig
from aapi.schema.models import (
    ArrayOf,
    FieldDescriptor,
    FieldModel,
    InferredType,
    Opaque,
    Scalar,
    ScalarKind,
    Unknown,
)


_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_OBJECT_ID = re.compile(r"[0-9a-fA-F]{24}")


class TypeConflictError(Exception):
    """Raised by :func:`reject_on_conflict` when samples disagree on a field's type."""

    def __init__(self, field: str, existing: InferredType, observed: InferredType) -> None:
        self.field = field
        self.existing = existing
        self.observed = observed
        super().__init__(
            f"Conflicting types for field '{field}': "
            f"{existing.api_type} vs {observed.api_type}"
        )


# (field name, type held so far, type inferred from the current sample) -> new type
MergeStrategy = Callable[[str, InferredType, InferredType], InferredType]


# ---------------------------------------------------------------------------
# Single-value inference
# ---------------------------------------------------------------------------

def infer_type(value: Any) -> InferredType:
    """Infer the type of a single JSON value.

    Strings starting with ``YYYY-MM-DD`` are dates, strings of exactly 24 hex
    characters are ObjectIds.  Lists are typed from their first element only;
    dicts are never expanded.
    """
    if value is None:
        return Unknown()
    if isinstance(value, str):
        if _DATE_PREFIX.match(value):
            return Scalar(kind=ScalarKind.DATE)
        if _OBJECT_ID.fullmatch(value):
            return Scalar(kind=ScalarKind.OBJECT_ID)
        return Scalar(kind=ScalarKind.STRING)
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return Scalar(kind=ScalarKind.BOOLEAN)
    if isinstance(value, int):
        return Scalar(kind=ScalarKind.INT)
    if isinstance(value, float):
        if value.is_integer():
            return Scalar(kind=ScalarKind.INT)
        return Scalar(kind=ScalarKind.FLOAT)
    if isinstance(value, list):
        if not value:
            return ArrayOf(element=Unknown())
        return ArrayOf(element=infer_type(value[0]))
    if isinstance(value, dict):
        return Opaque()
    return Unknown()


# ---------------------------------------------------------------------------
# Merge strategies
# ---------------------------------------------------------------------------

def first_seen_wins(name: str, existing: InferredType, observed: InferredType) -> InferredType:
    """Keep the type from the first observation, ignoring later samples."""
    return existing


def widen_to_opaque(name: str, existing: InferredType, observed: InferredType) -> InferredType:
    """Widen a field to ``Opaque`` (Mixed/JSON) as soon as two samples disagree.

    ``null`` observations carry no type evidence and never cause widening.
    """
    if isinstance(observed, Unknown) or existing == observed:
        return existing
    if isinstance(existing, Unknown):
        return observed
    return Opaque()


def reject_on_conflict(name: str, existing: InferredType, observed: InferredType) -> InferredType:
    """Raise :class:`TypeConflictError` when two samples disagree on a type."""
    if isinstance(observed, Unknown) or existing == observed:
        return existing
    if isinstance(existing, Unknown):
        return observed
    raise TypeConflictError(name, existing, observed)


# ---------------------------------------------------------------------------
# Sample analysis
# ---------------------------------------------------------------------------

def analyze(
    samples: dict[str, Any] | Sequence[Any],
    *,
    config: InferenceConfig | None = None,
    merge: MergeStrategy = first_seen_wins,
) -> FieldModel:
    """Derive a field model from sample documents.

    Args:
        samples: A single JSON object or a sequence of JSON objects.  Every
            sample is expected to be an object; anything else is skipped and
            does not count towards the examined total.
        config: Sampling knobs.  Defaults to :class:`InferenceConfig()`.
        merge: Strategy applied when a field is observed again.

    Returns:
        A new :class:`FieldModel` in first-observed field order.
    """
    config = config or InferenceConfig()
    if isinstance(samples, dict):
        samples = [samples]

    reserved = set(config.reserved_keys)
    types: dict[str, InferredType] = {}
    counts: dict[str, int] = {}
    values: dict[str, list[Any]] = {}
    examined = 0

    for sample in itertools.islice(samples, config.sample_limit):
        if not isinstance(sample, dict):
            continue
        examined += 1

        for key, value in sample.items():
            if key in reserved:
                continue

            observed = infer_type(value)
            if key not in types:
                types[key] = observed
                counts[key] = 0
                values[key] = []
            else:
                types[key] = merge(key, types[key], observed)

            counts[key] += 1
            if len(values[key]) < config.sample_value_limit:
                values[key].append(value)

    fields = {
        key: FieldDescriptor(
            name=key,
            type=types[key],
            required=counts[key] / examined > config.required_threshold,
            sample_values=values[key],
        )
        for key in types
    }
    return FieldModel(fields=fields, samples_examined=examined)
