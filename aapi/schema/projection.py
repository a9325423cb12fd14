"""Code projection from an inferred field model.

Renders a :class:`~aapi.schema.models.FieldModel` into the three artifacts
written for an imported entity:

- a Mongoose schema object literal (storage schema)
- GraphQL SDL with the object type, input type, queries and mutations
- an ES-module resolver map implementing CRUD against the Mongoose model

Every renderer is a pure function of its arguments.  ``parse_and_generate``
chains inference and all three renderers and is the entry point used by the
``import`` command.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from aapi.config import InferenceConfig
from aapi.schema.inference import MergeStrategy, analyze, first_seen_wins
from aapi.schema.models import (
    FieldDescriptor,
    FieldModel,
    GenerationResult,
    GenerationSummary,
)
from aapi.schema.templates import TemplateRenderer, pluralize, value_name


IDENTITY_FIELD = "_id"
TIMESTAMP_FIELDS = ("createdAt", "updatedAt")

_MIXED = "mongoose.Schema.Types.Mixed"
_OBJECT_ID = "mongoose.Schema.Types.ObjectId"
# The referenced model cannot be inferred from an id value alone.
_REF_PLACEHOLDER = "TODO"


def collection_name(type_name: str) -> str:
    """Name of the list query: ``User`` -> ``users``."""
    return pluralize(value_name(type_name))


# ---------------------------------------------------------------------------
# Storage schema
# ---------------------------------------------------------------------------

def render_storage_schema(fields: FieldModel) -> str:
    """Render the Mongoose schema definition object for *fields*."""
    lines = [f"  {name}: {{ {_storage_options(field)} }}" for name, field in fields.items()]
    return "{\n" + ",\n".join(lines) + "\n}"


def _storage_options(field: FieldDescriptor) -> str:
    storage_type = field.storage_type
    if storage_type == "Mixed":
        options = f"type: {_MIXED}"
    elif storage_type == "ObjectId":
        options = f"type: {_OBJECT_ID}, ref: '{_REF_PLACEHOLDER}'"
    else:
        # Scalars and bracketed arrays such as [String] render verbatim.
        options = f"type: {storage_type}"
    if field.required:
        options += ", required: true"
    return options


# ---------------------------------------------------------------------------
# GraphQL schema
# ---------------------------------------------------------------------------

def render_api_type(
    type_name: str,
    fields: FieldModel,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the GraphQL object type, including ``_id`` and timestamps."""
    renderer = renderer or TemplateRenderer()
    body = [f for f in fields.descriptors() if f.name not in TIMESTAMP_FIELDS]
    content = renderer.render(
        "api_type.graphql.j2", {"type_name": type_name, "fields": body}
    )
    return content.rstrip("\n")


def render_api_input(
    type_name: str,
    fields: FieldModel,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the ``<Type>Input`` type used by create and update mutations."""
    renderer = renderer or TemplateRenderer()
    excluded = {IDENTITY_FIELD, *TIMESTAMP_FIELDS}
    body = [f for f in fields.descriptors() if f.name not in excluded]
    content = renderer.render(
        "api_input.graphql.j2", {"type_name": type_name, "fields": body}
    )
    return content.rstrip("\n")


def render_api_schema(
    type_name: str,
    fields: FieldModel,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the complete GraphQL SDL for *type_name*.

    Contains the object type, the input type, a ``Query`` with list and
    find-by-id fields, and a ``Mutation`` with create, update and delete.
    """
    renderer = renderer or TemplateRenderer()
    operations = renderer.render("api_operations.graphql.j2", {"type_name": type_name})
    return "\n\n".join(
        [
            render_api_type(type_name, fields, renderer),
            render_api_input(type_name, fields, renderer),
            operations,
        ]
    )


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------

def render_resolvers(
    type_name: str,
    fields: FieldModel | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the CRUD resolver module for *type_name*.

    ``fields`` is accepted for field-aware resolvers but not used yet.  The
    generated ``get`` and ``update`` resolvers throw ``<Type> not found``;
    ``delete`` reports whether a document existed instead of throwing.
    """
    renderer = renderer or TemplateRenderer()
    return renderer.render("resolvers.js.j2", {"type_name": type_name})


# ---------------------------------------------------------------------------
# Aggregate driver
# ---------------------------------------------------------------------------

def parse_and_generate(
    samples: dict[str, Any] | Sequence[Any],
    type_name: str,
    *,
    config: InferenceConfig | None = None,
    merge: MergeStrategy = first_seen_wins,
) -> GenerationResult:
    """Analyze *samples* and render every artifact for *type_name*.

    Args:
        samples: Parsed JSON, either one object or a list of objects.
        type_name: Entity name, already validated by the caller.
        config: Inference knobs forwarded to :func:`analyze`.
        merge: Type merge strategy forwarded to :func:`analyze`.

    Returns:
        A :class:`GenerationResult` with the field model, the three rendered
        artifacts and a field-count summary.
    """
    fields = analyze(samples, config=config, merge=merge)
    renderer = TemplateRenderer()

    return GenerationResult(
        type_name=type_name,
        fields=fields,
        storage_schema=render_storage_schema(fields),
        api_schema=render_api_schema(type_name, fields, renderer),
        resolvers=render_resolvers(type_name, fields, renderer),
        summary=GenerationSummary.from_fields(fields),
    )
