"""Component metadata extraction.

Metadata is decoded once per discovery pass and tagged with the format it
came from, so consumers can tell semantic metadata (front-matter, JSON, YAML)
from plain file information.

Markdown front-matter format:
---
description: Brief description
tags: [tag1, tag2]
---

# Markdown content
"""

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from .filesystem import FileSystem

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


class MetadataKind(str, Enum):
    FRONTMATTER = "frontmatter"
    JSON = "json"
    YAML = "yaml"
    FILEINFO = "fileinfo"


EXTENSION_KINDS = {
    ".md": MetadataKind.FRONTMATTER,
    ".json": MetadataKind.JSON,
    ".yaml": MetadataKind.YAML,
    ".yml": MetadataKind.YAML,
}


@dataclass(frozen=True)
class ComponentMetadata:
    """Decoded metadata record tagged with its source format."""

    kind: MetadataKind = MetadataKind.FILEINFO
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls, kind: MetadataKind = MetadataKind.FILEINFO) -> "ComponentMetadata":
        return cls(kind=kind, fields={})

    @property
    def is_semantic(self) -> bool:
        """True for metadata authored by a human (not derived file info)."""
        return self.kind is not MetadataKind.FILEINFO

    @property
    def description(self) -> str | None:
        value = self.fields.get("description")
        return value if isinstance(value, str) else None

    @property
    def tags(self) -> list[str]:
        value = self.fields.get("tags")
        if not isinstance(value, list):
            return []
        return [tag for tag in value if isinstance(tag, str) and tag]

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self.fields

    def __bool__(self) -> bool:
        return bool(self.fields)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "fields": dict(self.fields)}


def parse_frontmatter(content: str) -> dict[str, Any]:
    """
    Parse the YAML front-matter block at the top of a markdown document.

    Returns:
        The front-matter mapping, or an empty dict when the document has no
        front-matter or the block is not a valid YAML mapping
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return {}

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.debug(f"Malformed front-matter: {e}")
        return {}

    return data if isinstance(data, dict) else {}


def _parse_json(content: str) -> dict[str, Any]:
    data = json.loads(content)
    if not isinstance(data, dict):
        return {}
    nested = data.get("metadata")
    if isinstance(nested, dict):
        return nested
    return data


def _parse_yaml(content: str) -> dict[str, Any]:
    data = yaml.safe_load(content)
    return data if isinstance(data, dict) else {}


def extract_metadata(fs: "FileSystem", file_path: str) -> ComponentMetadata:
    """
    Extract metadata from a component file by sniffing its extension.

    Markdown yields front-matter, JSON yields the nested ``metadata`` object
    (or the whole document), YAML yields the document; any other extension
    yields basic file info. Failures degrade to an empty record and never
    propagate.

    Args:
        fs: Filesystem the file lives on
        file_path: Path of the component file

    Returns:
        ComponentMetadata tagged with the format it was decoded from
    """
    ext = fs.suffix(file_path).lower()
    kind = EXTENSION_KINDS.get(ext, MetadataKind.FILEINFO)

    try:
        if kind is MetadataKind.FILEINFO:
            stats = fs.stat(file_path)
            return ComponentMetadata(
                kind=kind,
                fields={"size": stats.size, "modified": stats.mtime, "extension": ext},
            )

        content = fs.read_text(file_path)
        if kind is MetadataKind.FRONTMATTER:
            fields = parse_frontmatter(content)
        elif kind is MetadataKind.JSON:
            fields = _parse_json(content)
        else:
            fields = _parse_yaml(content)
        return ComponentMetadata(kind=kind, fields=fields)

    except Exception as e:
        logger.debug(f"Failed to extract metadata from {file_path}: {e}")
        return ComponentMetadata.empty(kind)
