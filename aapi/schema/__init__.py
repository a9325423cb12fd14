"""aapi schema inference engine.

Analyzes sample JSON documents, infers a field-level type model and renders
it as a Mongoose schema, GraphQL SDL and CRUD resolvers.

Quick usage::

    from aapi.schema import parse_and_generate

    result = parse_and_generate(
        [{"username": "a", "age": 1}, {"username": "b"}],
        "User",
    )
    print(result.api_schema)
    print(result.summary)
"""

from aapi.schema.inference import (
    MergeStrategy,
    TypeConflictError,
    analyze,
    first_seen_wins,
    infer_type,
    reject_on_conflict,
    widen_to_opaque,
)
from aapi.schema.models import (
    ArrayOf,
    FieldDescriptor,
    FieldModel,
    GenerationResult,
    GenerationSummary,
    InferredType,
    Opaque,
    Scalar,
    ScalarKind,
    Unknown,
)
from aapi.schema.projection import (
    parse_and_generate,
    render_api_input,
    render_api_schema,
    render_api_type,
    render_resolvers,
    render_storage_schema,
)
from aapi.schema.templates import TemplateRenderer

__all__ = [
    "analyze",
    "infer_type",
    "parse_and_generate",
    "render_storage_schema",
    "render_api_schema",
    "render_api_type",
    "render_api_input",
    "render_resolvers",
    "first_seen_wins",
    "widen_to_opaque",
    "reject_on_conflict",
    "MergeStrategy",
    "TypeConflictError",
    "ArrayOf",
    "FieldDescriptor",
    "FieldModel",
    "GenerationResult",
    "GenerationSummary",
    "InferredType",
    "Opaque",
    "Scalar",
    "ScalarKind",
    "Unknown",
    "TemplateRenderer",
]
