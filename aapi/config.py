"""aapi configuration.

Typed configuration for schema inference and artifact output.  All settings
use Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class InferenceConfig(BaseModel):
    """Knobs for the sample scan performed by ``analyze``.

    The defaults reproduce the behaviour the generated code has always had:
    ten samples, a strict 80% presence threshold for ``required`` and three
    example values per field.
    """

    sample_limit: int = Field(
        default=10, ge=1, description="Maximum number of samples examined"
    )
    required_threshold: float = Field(
        default=0.8,
        ge=0.0,
        le=1.0,
        description="A field is required when its presence ratio is strictly greater",
    )
    sample_value_limit: int = Field(
        default=3, ge=0, description="Example values kept per field"
    )
    reserved_keys: list[str] = Field(
        default=["_id", "__v"],
        description="Identity and revision keys never turned into fields",
    )


class OutputConfig(BaseModel):
    """Where generated artifacts are written, relative to the project root."""

    models_dir: Path = Field(default=Path("src/models"))
    typedefs_dir: Path = Field(default=Path("src/graphql/typeDefs"))
    resolvers_dir: Path = Field(default=Path("src/graphql/resolvers"))

    def model_path(self, root: Path, type_name: str) -> Path:
        """Path of the Mongoose model module for *type_name*."""
        return root / self.models_dir / f"{type_name}.js"

    def typedefs_path(self, root: Path, type_name: str) -> Path:
        """Path of the GraphQL SDL file for *type_name*."""
        return root / self.typedefs_dir / f"{type_name}.graphql"

    def resolvers_path(self, root: Path, type_name: str) -> Path:
        """Path of the resolver module for *type_name*."""
        return root / self.resolvers_dir / f"{type_name}Resolver.js"


class Config(BaseModel):
    """Global aapi configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the importer and the inference engine.
    """

    project_root: Path = Field(default=Path("."))
    inference: InferenceConfig = Field(default_factory=InferenceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.

        Returns:
            The path where the file was written.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``Config`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            AAPI_PROJECT_ROOT, AAPI_SAMPLE_LIMIT, AAPI_REQUIRED_THRESHOLD,
            AAPI_SAMPLE_VALUE_LIMIT.
        """
        inference_kwargs: dict[str, Any] = {}
        if os.environ.get("AAPI_SAMPLE_LIMIT"):
            inference_kwargs["sample_limit"] = int(os.environ["AAPI_SAMPLE_LIMIT"])
        if os.environ.get("AAPI_REQUIRED_THRESHOLD"):
            inference_kwargs["required_threshold"] = float(os.environ["AAPI_REQUIRED_THRESHOLD"])
        if os.environ.get("AAPI_SAMPLE_VALUE_LIMIT"):
            inference_kwargs["sample_value_limit"] = int(os.environ["AAPI_SAMPLE_VALUE_LIMIT"])

        return cls(
            project_root=Path(os.environ.get("AAPI_PROJECT_ROOT", ".")),
            inference=InferenceConfig(**inference_kwargs),
        )
