"""JSON import: from a sample file on disk to generated entity files.

This is the thin layer around the inference engine.  It reads and checks the
sample file, derives and validates the entity name, and writes the generated
model, GraphQL schema and resolver files into the target project.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from aapi.config import OutputConfig
from aapi.schema.models import GenerationResult
from aapi.schema.templates import TemplateRenderer, pascal_case, write_file
from aapi.utils import load_json


MAX_TYPE_NAME_LENGTH = 100

_IDENTIFIER = re.compile(r"[a-zA-Z_$][a-zA-Z0-9_$]*")

# Generated resolvers and models are JavaScript, so the entity name must not
# collide with a reserved word there.
RESERVED_KEYWORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "export", "extends", "finally", "for",
    "function", "if", "import", "in", "instanceof", "new", "return", "super",
    "switch", "this", "throw", "try", "typeof", "var", "void", "while",
    "with", "yield", "let", "static", "enum", "await", "implements",
    "interface", "package", "private", "protected", "public",
})


class SchemaImportError(Exception):
    """Raised when a sample file cannot be imported."""


class NameValidation(BaseModel):
    """Outcome of :func:`validate_type_name`."""
    valid: bool = Field(..., description="Whether the name can be used")
    error: Optional[str] = Field(default=None, description="Reason the name was rejected")


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

def load_samples(path: str | Path) -> Any:
    """Read a JSON sample file and check it holds objects.

    Returns:
        The parsed value: one object or a list of objects.

    Raises:
        SchemaImportError: If the file is missing or unreadable, is not
            valid UTF-8 JSON, or does not contain an object or an array of
            objects.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SchemaImportError(f"File not found: {path}")

    try:
        data = load_json(file_path)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SchemaImportError(f"Failed to parse JSON file {path}: {exc}") from exc
    except OSError as exc:
        raise SchemaImportError(f"Failed to read {path}: {exc}") from exc

    if isinstance(data, dict):
        return data
    if isinstance(data, list):
        if not data:
            raise SchemaImportError(f"No sample documents in {path}")
        if not all(isinstance(item, dict) for item in data):
            raise SchemaImportError(f"Expected an array of objects in {path}")
        return data
    raise SchemaImportError(
        f"Expected a JSON object or an array of objects in {path}, "
        f"got {type(data).__name__}"
    )


def derive_type_name(path: str | Path) -> str:
    """Derive an entity name from a file name: ``user-profiles.json`` -> ``UserProfiles``."""
    return pascal_case(Path(path).stem)


def validate_type_name(name: str) -> NameValidation:
    """Check that *name* can be used as a generated JavaScript identifier."""
    if not name:
        return NameValidation(valid=False, error="Model name is required")
    if len(name) > MAX_TYPE_NAME_LENGTH:
        return NameValidation(
            valid=False,
            error=f"Model name must be {MAX_TYPE_NAME_LENGTH} characters or less",
        )
    if not _IDENTIFIER.fullmatch(name):
        return NameValidation(
            valid=False,
            error=(
                "Model name must be a valid JavaScript identifier "
                "(letters, numbers, underscore, dollar sign)"
            ),
        )
    if name.lower() in RESERVED_KEYWORDS:
        return NameValidation(
            valid=False,
            error=f'"{name}" is a JavaScript reserved keyword and cannot be used',
        )
    return NameValidation(valid=True)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class ArtifactWriter:
    """Writes the generated model, schema and resolver files for one entity."""

    def __init__(
        self,
        project_root: str | Path,
        output: OutputConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.output = output or OutputConfig()
        self.renderer = renderer or TemplateRenderer()

    def paths_for(self, type_name: str) -> dict[str, Path]:
        """Return the ``model``, ``typedefs`` and ``resolvers`` paths for *type_name*."""
        return {
            "model": self.output.model_path(self.project_root, type_name),
            "typedefs": self.output.typedefs_path(self.project_root, type_name),
            "resolvers": self.output.resolvers_path(self.project_root, type_name),
        }

    def existing_files(self, type_name: str) -> list[Path]:
        """Return the output paths for *type_name* that already exist."""
        return [p for p in self.paths_for(type_name).values() if p.exists()]

    async def write(self, result: GenerationResult, *, force: bool = False) -> list[Path]:
        """Write every artifact in *result*.

        Args:
            result: Output of ``parse_and_generate``.
            force: Overwrite files that already exist.

        Returns:
            The written paths, in model, typedefs, resolvers order.

        Raises:
            SchemaImportError: If any target exists and *force* is false.
        """
        existing = self.existing_files(result.type_name)
        if existing and not force:
            listing = ", ".join(str(p.relative_to(self.project_root)) for p in existing)
            raise SchemaImportError(
                f"Model {result.type_name} already exists ({listing}); "
                "use --force to overwrite"
            )

        paths = self.paths_for(result.type_name)
        await self.renderer.render_to_file(
            "model.js.j2",
            paths["model"],
            {"type_name": result.type_name, "storage_schema": result.storage_schema},
        )
        await asyncio.to_thread(write_file, paths["typedefs"], result.api_schema)
        await asyncio.to_thread(write_file, paths["resolvers"], result.resolvers)
        return list(paths.values())
