"""Unit tests for component metadata extraction."""

import pytest

from zcc.filesystem import MemoryFileSystem
from zcc.metadata import (
    ComponentMetadata,
    MetadataKind,
    extract_metadata,
    parse_frontmatter,
)


class TestParseFrontmatter:
    """Tests for parse_frontmatter."""

    def test_parses_mapping(self):
        """Front-matter block is decoded as YAML."""
        content = "---\ndescription: Hello\ntags: [a, b]\n---\n# Body\n"

        assert parse_frontmatter(content) == {"description": "Hello", "tags": ["a", "b"]}

    def test_no_frontmatter_returns_empty(self):
        """Plain markdown has no metadata."""
        assert parse_frontmatter("# Just a heading\n") == {}

    def test_malformed_yaml_returns_empty(self):
        """Invalid YAML in the header degrades to empty."""
        assert parse_frontmatter("---\ninvalid: yaml: [\n---\n") == {}

    def test_non_mapping_returns_empty(self):
        """A YAML list header is not metadata."""
        assert parse_frontmatter("---\n- a\n- b\n---\n") == {}

    def test_unterminated_header_returns_empty(self):
        """A header without a closing delimiter is ignored."""
        assert parse_frontmatter("---\ndescription: x\n# Body\n") == {}


class TestExtractMetadata:
    """Tests for extract_metadata extension sniffing."""

    def test_markdown(self):
        """Markdown yields front-matter metadata."""
        fs = MemoryFileSystem({"/m/a.md": "---\ndescription: Mode\n---\n"})

        metadata = extract_metadata(fs, "/m/a.md")

        assert metadata.kind is MetadataKind.FRONTMATTER
        assert metadata.description == "Mode"

    def test_json_prefers_nested_metadata(self):
        """JSON with a metadata object uses that object."""
        fs = MemoryFileSystem({"/h/a.json": '{"metadata": {"description": "Hook"}, "event": "x"}'})

        metadata = extract_metadata(fs, "/h/a.json")

        assert metadata.kind is MetadataKind.JSON
        assert metadata.fields == {"description": "Hook"}

    def test_json_without_metadata_uses_whole_document(self):
        """JSON without a metadata key uses the entire object."""
        fs = MemoryFileSystem({"/h/a.json": '{"description": "Hook", "event": "x"}'})

        assert extract_metadata(fs, "/h/a.json").fields == {"description": "Hook", "event": "x"}

    def test_invalid_json_is_empty(self):
        """Unparsable JSON degrades to an empty record."""
        fs = MemoryFileSystem({"/h/a.json": "{not json"})

        metadata = extract_metadata(fs, "/h/a.json")

        assert metadata.kind is MetadataKind.JSON
        assert not metadata

    @pytest.mark.parametrize("ext", [".yaml", ".yml"])
    def test_yaml(self, ext):
        """YAML files are decoded as documents."""
        fs = MemoryFileSystem({f"/h/a{ext}": "description: Hook\ntags: [x]\n"})

        metadata = extract_metadata(fs, f"/h/a{ext}")

        assert metadata.kind is MetadataKind.YAML
        assert metadata.tags == ["x"]

    def test_empty_yaml_is_empty(self):
        """An empty YAML document yields an empty record."""
        fs = MemoryFileSystem({"/h/a.yaml": ""})

        assert extract_metadata(fs, "/h/a.yaml").fields == {}

    def test_other_extension_yields_fileinfo(self):
        """Unknown extensions produce file info, not semantic metadata."""
        fs = MemoryFileSystem({"/s/run.sh": "echo hi\n"})

        metadata = extract_metadata(fs, "/s/run.sh")

        assert metadata.kind is MetadataKind.FILEINFO
        assert metadata.is_semantic is False
        assert metadata.get("size") == 8
        assert metadata.get("extension") == ".sh"

    def test_missing_file_degrades_to_empty(self):
        """Read errors never propagate."""
        metadata = extract_metadata(MemoryFileSystem(), "/missing.md")

        assert metadata == ComponentMetadata.empty(MetadataKind.FRONTMATTER)


class TestComponentMetadata:
    """Tests for ComponentMetadata accessors."""

    def test_tags_ignores_non_strings(self):
        """tags only returns non-empty strings."""
        metadata = ComponentMetadata(MetadataKind.YAML, {"tags": ["a", 3, None, "", "b"]})

        assert metadata.tags == ["a", "b"]

    def test_tags_non_list_is_empty(self):
        """A scalar tags value is ignored."""
        assert ComponentMetadata(MetadataKind.YAML, {"tags": "a"}).tags == []

    def test_description_must_be_string(self):
        """Non-string descriptions are ignored."""
        assert ComponentMetadata(MetadataKind.JSON, {"description": 5}).description is None
