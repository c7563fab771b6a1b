"""Note store: identifier -> attributes and cached content."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Protocol

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from ..config import TreeConfig
from ..errors import MalformedAttributes, NoteNotFound, UnreadableNote
from ..models import Attributes
from .parser import parse_filename, parse_org_front_matter, split_org_body

logger = logging.getLogger(__name__)


class NoteStore(Protocol):
    """What the walker needs from a store of notes."""

    def fetch(self, identifier: str) -> Attributes:
        ...

    def content(self, identifier: str) -> str:
        ...

    def release_all(self) -> None:
        ...


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a key repeated within one mapping."""

    def construct_mapping(self, node, deep=False):
        seen = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


class StrictYAMLHandler(YAMLHandler):
    def load(self, fm, **kwargs):
        return yaml.load(fm, Loader=UniqueKeyLoader)


def _coerce(identifier: str, name: str, value: Any) -> str | None:
    """Flatten a front matter value to a string, keeping None for absent."""
    if value is None:
        return None
    if isinstance(value, dict):
        raise MalformedAttributes(identifier, f"field '{name}' is a mapping")
    if isinstance(value, (list, tuple)):
        parts = [_coerce(identifier, name, v) for v in value]
        sep = "_" if name == "keywords" else ", "
        return sep.join(p for p in parts if p)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if name == "keywords" and isinstance(value, str):
        # org filetags are written :a:b:
        if value.startswith(":") and value.endswith(":"):
            return "_".join(p for p in value.split(":") if p)
    return str(value)


class DirectoryNoteStore:
    """Notes stored as files named `ID==SIGNATURE--TITLE__KEYWORDS.ext`.

    Attributes come from front matter (YAML for .md/.txt, `#+key:` lines for
    .org) with the file name filling the gaps. Content is read once per
    identifier and cached until `release_all`.
    """

    def __init__(self, root: Path, config: TreeConfig | None = None):
        self.root = root
        self.config = config or TreeConfig()
        self.reads = 0
        self._paths: dict[str, Path] | None = None
        self._content: dict[str, str] = {}
        self._metadata: dict[str, dict[str, Any]] = {}

    def _index(self) -> dict[str, Path]:
        if self._paths is not None:
            return self._paths

        paths: dict[str, Path] = {}
        for path in sorted(self.root.rglob("*")):
            rel = path.relative_to(self.root)
            # Skip hidden files and directories
            if any(part.startswith(".") for part in rel.parts):
                continue
            if not path.is_file() or path.suffix.lower() not in self.config.extensions:
                continue
            parsed = parse_filename(path.name)
            if not parsed:
                continue
            identifier = parsed["identifier"]
            if identifier in paths:
                logger.warning("Duplicate identifier %s: keeping %s, ignoring %s", identifier, paths[identifier], path)
                continue
            paths[identifier] = path

        logger.debug("Indexed %d notes under %s", len(paths), self.root)
        self._paths = paths
        return paths

    def identifiers(self) -> list[str]:
        return sorted(self._index())

    def path_of(self, identifier: str) -> Path:
        try:
            return self._index()[identifier]
        except KeyError:
            raise NoteNotFound(identifier, (identifier,)) from None

    def _read(self, identifier: str) -> None:
        """Read a note once, caching both its metadata and its body."""
        if identifier in self._content:
            return

        path = self.path_of(identifier)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise UnreadableNote(identifier, str(path), "not valid UTF-8") from e
        except OSError as e:
            raise UnreadableNote(identifier, str(path), e.strerror or str(e)) from e
        self.reads += 1

        if path.suffix.lower() == ".org":
            metadata: dict[str, Any] = dict(parse_org_front_matter(text, identifier))
            body = split_org_body(text)
        else:
            try:
                handler = StrictYAMLHandler() if YAMLHandler.FM_BOUNDARY.match(text.lstrip()) else None
                post = frontmatter.loads(text, handler=handler)
            except (yaml.YAMLError, ValueError, TypeError) as e:
                raise MalformedAttributes(identifier, f"unreadable front matter ({e})") from e
            metadata = post.metadata
            body = post.content
            if not isinstance(metadata, dict):
                raise MalformedAttributes(identifier, "front matter is not a mapping")

        self._metadata[identifier] = {str(k).lower(): v for k, v in metadata.items()}
        self._content[identifier] = body

    def fetch(self, identifier: str) -> Attributes:
        """Build the attribute mapping for a note.

        Every known and extra field is present, None where absent.
        """
        self._read(identifier)
        metadata = self._metadata[identifier]
        from_name = parse_filename(self.path_of(identifier).name)

        declared = metadata.get("identifier")
        if declared is not None and str(declared) != identifier:
            raise MalformedAttributes(identifier, f"front matter identifier {declared!r} conflicts with file name")

        attributes: Attributes = {}
        for name in self.config.all_fields:
            raw = metadata.get(name)
            if name == "keywords" and raw is None:
                raw = metadata.get("tags", metadata.get("filetags"))
            value = _coerce(identifier, name, raw)
            if value is None:
                value = from_name.get(name)
            attributes[name] = value
        return attributes

    def content(self, identifier: str) -> str:
        """Body of a note, read from disk at most once per identifier."""
        self._read(identifier)
        return self._content[identifier]

    def release_all(self) -> None:
        self._content.clear()
        self._metadata.clear()
