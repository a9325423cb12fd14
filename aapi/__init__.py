"""aapi -- Mongoose and GraphQL code generation from sample JSON.

Analyzes sample documents, infers their field types and renders a Mongoose
schema, GraphQL SDL and CRUD resolvers for the imported entity.

Usage::

    from aapi import parse_and_generate

    result = parse_and_generate(samples, "User")
    print(result.storage_schema)
"""

from aapi.config import Config, InferenceConfig, OutputConfig
from aapi.schema import (
    FieldDescriptor,
    FieldModel,
    GenerationResult,
    GenerationSummary,
    analyze,
    infer_type,
    parse_and_generate,
)

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "infer_type",
    "parse_and_generate",
    "Config",
    "InferenceConfig",
    "OutputConfig",
    "FieldDescriptor",
    "FieldModel",
    "GenerationResult",
    "GenerationSummary",
]
