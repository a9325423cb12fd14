"""Tests for the JSON import layer (aapi.importer).

Covers:
- load_samples: valid objects/arrays, missing or unreadable files, bad JSON,
  wrong shapes
- derive_type_name from file names
- validate_type_name identifier and keyword rules
- ArtifactWriter paths, overwrite refusal, forced overwrite, file contents
"""

from __future__ import annotations

from pathlib import Path

import pytest

from aapi.config import OutputConfig
from aapi.importer import (
    ArtifactWriter,
    SchemaImportError,
    derive_type_name,
    load_samples,
    validate_type_name,
)
from aapi.schema.projection import parse_and_generate


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# load_samples
# ---------------------------------------------------------------------------


class TestLoadSamples:
    def test_array_of_objects(self, sample_file: Path, user_samples):
        assert load_samples(sample_file) == user_samples

    def test_single_object(self, write_json):
        path = write_json("user.json", {"name": "x"})
        assert load_samples(path) == {"name": "x"}

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SchemaImportError, match="File not found"):
            load_samples(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaImportError, match="Failed to parse JSON"):
            load_samples(path)

    def test_non_utf8_file(self, tmp_path: Path):
        path = tmp_path / "latin1.json"
        path.write_bytes('[{"name": "café"}]'.encode("latin-1"))
        with pytest.raises(SchemaImportError, match="Failed to parse JSON"):
            load_samples(path)

    def test_unreadable_file(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "locked.json"
        path.write_text("{}", encoding="utf-8")

        def deny(*args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "read_text", deny)
        with pytest.raises(SchemaImportError, match="Failed to read"):
            load_samples(path)

    def test_scalar_rejected(self, write_json):
        with pytest.raises(SchemaImportError, match="got int"):
            load_samples(write_json("n.json", 5))

    def test_array_of_scalars_rejected(self, write_json):
        with pytest.raises(SchemaImportError, match="array of objects"):
            load_samples(write_json("nums.json", [1, 2, 3]))

    def test_empty_array_rejected(self, write_json):
        with pytest.raises(SchemaImportError, match="No sample documents"):
            load_samples(write_json("empty.json", []))


# ---------------------------------------------------------------------------
# Type names
# ---------------------------------------------------------------------------


class TestTypeNames:
    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("users.json", "Users"),
            ("user-profiles.json", "UserProfiles"),
            ("order_items.json", "OrderItems"),
            ("data/blogPost.json", "BlogPost"),
            ("Product.json", "Product"),
        ],
    )
    def test_derive_type_name(self, filename: str, expected: str):
        assert derive_type_name(filename) == expected

    @pytest.mark.parametrize("name", ["User", "_Private", "$Store", "Order2", "a"])
    def test_valid_names(self, name: str):
        result = validate_type_name(name)
        assert result.valid is True
        assert result.error is None

    @pytest.mark.parametrize(
        "name, message",
        [
            ("", "required"),
            ("2Fast", "valid JavaScript identifier"),
            ("User Profile", "valid JavaScript identifier"),
            ("User-Profile", "valid JavaScript identifier"),
            ("User\n", "valid JavaScript identifier"),
            ("Class", "reserved keyword"),
            ("Import", "reserved keyword"),
            ("A" * 101, "100 characters or less"),
        ],
    )
    def test_invalid_names(self, name: str, message: str):
        result = validate_type_name(name)
        assert result.valid is False
        assert message in result.error

    def test_max_length_accepted(self):
        assert validate_type_name("A" * 100).valid is True


# ---------------------------------------------------------------------------
# ArtifactWriter
# ---------------------------------------------------------------------------


class TestArtifactWriter:
    def test_default_paths(self, tmp_project_dir: Path):
        paths = ArtifactWriter(tmp_project_dir).paths_for("User")
        assert paths == {
            "model": tmp_project_dir / "src" / "models" / "User.js",
            "typedefs": tmp_project_dir / "src" / "graphql" / "typeDefs" / "User.graphql",
            "resolvers": tmp_project_dir / "src" / "graphql" / "resolvers" / "UserResolver.js",
        }

    def test_custom_output_dirs(self, tmp_project_dir: Path):
        output = OutputConfig(models_dir=Path("models"))
        paths = ArtifactWriter(tmp_project_dir, output).paths_for("User")
        assert paths["model"] == tmp_project_dir / "models" / "User.js"

    @pytest.mark.asyncio
    async def test_write_creates_all_files(self, tmp_project_dir: Path, user_samples):
        result = parse_and_generate(user_samples, "User")
        written = await ArtifactWriter(tmp_project_dir).write(result)

        assert len(written) == 3
        assert all(p.exists() for p in written)

        model = written[0].read_text(encoding="utf-8")
        assert "const UserSchema = new mongoose.Schema(\n  {\n  username:" in model
        assert "  age: { type: Number }\n}," in model
        assert "export default mongoose.model('User', UserSchema);" in model

        assert written[1].read_text(encoding="utf-8") == result.api_schema
        assert written[2].read_text(encoding="utf-8") == result.resolvers

    @pytest.mark.asyncio
    async def test_refuses_to_overwrite(self, tmp_project_dir: Path, user_samples):
        result = parse_and_generate(user_samples, "User")
        writer = ArtifactWriter(tmp_project_dir)
        existing = writer.paths_for("User")["typedefs"]
        existing.parent.mkdir(parents=True)
        existing.write_text("keep me", encoding="utf-8")

        with pytest.raises(SchemaImportError, match="already exists") as exc_info:
            await writer.write(result)

        assert "User.graphql" in str(exc_info.value)
        assert existing.read_text(encoding="utf-8") == "keep me"
        assert not writer.paths_for("User")["model"].exists()

    @pytest.mark.asyncio
    async def test_force_overwrites(self, tmp_project_dir: Path, user_samples):
        result = parse_and_generate(user_samples, "User")
        writer = ArtifactWriter(tmp_project_dir)
        await writer.write(result)
        assert len(writer.existing_files("User")) == 3

        written = await writer.write(result, force=True)
        assert written[1].read_text(encoding="utf-8") == result.api_schema
