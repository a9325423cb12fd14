"""Pydantic v2 models for the aapi schema inference engine.

Defines the type lattice used to describe an inferred field, the per-field
descriptor, the ordered field model produced by one inference run, and the
aggregate result handed back to the CLI layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ScalarKind(str, Enum):
    """Scalar kinds recognised when inspecting a single JSON value."""
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    OBJECT_ID = "object_id"


# (storage type, api type) per scalar kind.
SCALAR_PROJECTIONS: dict[ScalarKind, tuple[str, str]] = {
    ScalarKind.STRING: ("String", "String"),
    ScalarKind.INT: ("Number", "Int"),
    ScalarKind.FLOAT: ("Number", "Float"),
    ScalarKind.BOOLEAN: ("Boolean", "Boolean"),
    ScalarKind.DATE: ("Date", "Date"),
    ScalarKind.OBJECT_ID: ("ObjectId", "ID"),
}


# ---------------------------------------------------------------------------
# Type lattice
# ---------------------------------------------------------------------------

class Scalar(BaseModel):
    """A leaf value of a known kind."""
    model_config = ConfigDict(frozen=True)

    tag: Literal["scalar"] = "scalar"
    kind: ScalarKind

    @property
    def storage_type(self) -> str:
        return SCALAR_PROJECTIONS[self.kind][0]

    @property
    def api_type(self) -> str:
        return SCALAR_PROJECTIONS[self.kind][1]


class ArrayOf(BaseModel):
    """A list whose element type was taken from its first element."""
    model_config = ConfigDict(frozen=True)

    tag: Literal["array"] = "array"
    element: InferredType

    @property
    def storage_type(self) -> str:
        return f"[{self.element.storage_type}]"

    @property
    def api_type(self) -> str:
        return f"[{self.element.api_type}]"


class Opaque(BaseModel):
    """A nested object that is stored and exposed without expansion."""
    model_config = ConfigDict(frozen=True)

    tag: Literal["opaque"] = "opaque"

    @property
    def storage_type(self) -> str:
        return "Mixed"

    @property
    def api_type(self) -> str:
        return "JSON"


class Unknown(BaseModel):
    """No usable evidence: a ``null`` value or the element of an empty list.

    The API side falls back to ``String`` while storage stays ``Mixed``,
    which keeps generated output identical to earlier releases of the tool.
    """
    model_config = ConfigDict(frozen=True)

    tag: Literal["unknown"] = "unknown"

    @property
    def storage_type(self) -> str:
        return "Mixed"

    @property
    def api_type(self) -> str:
        return "String"


InferredType = Annotated[
    Union[Scalar, ArrayOf, Opaque, Unknown],
    Field(discriminator="tag"),
]

ArrayOf.model_rebuild()


# ---------------------------------------------------------------------------
# Field model
# ---------------------------------------------------------------------------

class FieldDescriptor(BaseModel):
    """Everything inferred about one field name across the examined samples."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Key as it appeared in the source documents")
    type: InferredType = Field(..., description="Type fixed by the merge strategy")
    required: bool = Field(default=False, description="Present in more than the threshold share of samples")
    sample_values: list[Any] = Field(
        default_factory=list, description="Up to three raw example values, in observed order"
    )

    @property
    def storage_type(self) -> str:
        """Mongoose type, e.g. ``String`` or ``[Number]``."""
        return self.type.storage_type

    @property
    def api_type(self) -> str:
        """GraphQL type, e.g. ``Int`` or ``[String]``."""
        return self.type.api_type


class FieldModel(BaseModel):
    """Insertion-ordered mapping of field name to :class:`FieldDescriptor`.

    Built once per :func:`aapi.schema.inference.analyze` call.  Attribute
    assignment is rejected and every accessor returns a fresh list or dict,
    so callers cannot change the model through them.  The ``fields`` dict
    itself is the model's storage: treat it as read-only.
    """
    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldDescriptor] = Field(default_factory=dict)
    samples_examined: int = Field(default=0, ge=0)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __getitem__(self, name: str) -> FieldDescriptor:
        return self.fields[name]

    def names(self) -> list[str]:
        return list(self.fields)

    def items(self) -> list[tuple[str, FieldDescriptor]]:
        return list(self.fields.items())

    def descriptors(self) -> list[FieldDescriptor]:
        return list(self.fields.values())

    @property
    def required_count(self) -> int:
        return sum(1 for f in self.fields.values() if f.required)

    @property
    def optional_count(self) -> int:
        return len(self.fields) - self.required_count

    def preview(self) -> dict[str, dict[str, Any]]:
        """Return a display-friendly ``{name: {api_type, required, samples}}`` dict."""
        return {
            name: {
                "api_type": field.api_type,
                "required": field.required,
                "samples": list(field.sample_values),
            }
            for name, field in self.fields.items()
        }


# ---------------------------------------------------------------------------
# Generation result
# ---------------------------------------------------------------------------

class GenerationSummary(BaseModel):
    """Field counts reported after a generation run."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_fields: int = Field(default=0, alias="totalFields")
    required_fields: int = Field(default=0, alias="requiredFields")
    optional_fields: int = Field(default=0, alias="optionalFields")

    @classmethod
    def from_fields(cls, fields: FieldModel) -> "GenerationSummary":
        return cls(
            total_fields=len(fields),
            required_fields=fields.required_count,
            optional_fields=fields.optional_count,
        )


class GenerationResult(BaseModel):
    """Complete output of :func:`aapi.schema.projection.parse_and_generate`."""
    model_config = ConfigDict(frozen=True)

    type_name: str = Field(..., description="Entity name used for generated identifiers")
    fields: FieldModel = Field(..., description="Inferred field model")
    storage_schema: str = Field(..., description="Mongoose schema object literal")
    api_schema: str = Field(..., description="GraphQL type, input, query and mutation SDL")
    resolvers: str = Field(..., description="CRUD resolver module source")
    summary: GenerationSummary = Field(..., description="Field counts")
