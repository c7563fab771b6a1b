"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from notetree.config import TreeConfig
from notetree.errors import NoteNotFound
from notetree.models import RenderedTree
from notetree.tree.builder import build_tree


class MemoryStore:
    """In-memory note store; content is the space-separated link list."""

    def __init__(self, graph: dict[str, list[str]], titles: dict[str, str] | None = None):
        self.graph = graph
        self.titles = titles or {}
        self.reads = 0
        self._cache: dict[str, str] = {}

    def fetch(self, identifier: str) -> dict[str, str | None]:
        if identifier not in self.graph:
            raise NoteNotFound(identifier, (identifier,))
        return {"title": self.titles.get(identifier, identifier), "keywords": None}

    def content(self, identifier: str) -> str:
        if identifier in self._cache:
            return self._cache[identifier]
        if identifier not in self.graph:
            raise NoteNotFound(identifier, (identifier,))
        self.reads += 1
        text = " ".join(self.graph[identifier])
        self._cache[identifier] = text
        return text

    def release_all(self) -> None:
        self._cache.clear()


def split_links(content: str) -> list[str]:
    return content.split()


@pytest.fixture
def build() -> Callable[..., RenderedTree]:
    """Build a tree from a {id: [links]} mapping rooted at 'R'."""

    def _build(
        graph: dict[str, list[str]],
        titles: dict[str, str] | None = None,
        root: str = "R",
        config: TreeConfig | None = None,
    ) -> RenderedTree:
        return build_tree(root, MemoryStore(graph, titles), config, extract=split_links)

    return _build


def write_note(
    vault: Path,
    identifier: str,
    title: str,
    links: list[str] | None = None,
    *,
    keywords: list[str] | None = None,
    extra: list[str] | None = None,
) -> Path:
    """Write a markdown note with YAML front matter linking to `links`."""
    slug = title.lower().replace(" ", "-")
    name = f"{identifier}--{slug}"
    if keywords:
        name += "__" + "_".join(keywords)
    path = vault / f"{name}.md"
    front = [
        "---",
        f'title: "{title}"',
        f'identifier: "{identifier}"',
    ]
    if keywords:
        front.append(f"tags: [{', '.join(keywords)}]")
    front.extend(extra or [])
    front.append("---")
    body = [f"- [[denote:{target}]]" for target in (links or [])]
    path.write_text("\n".join([*front, "", f"# {title}", "", *body, ""]), encoding="utf-8")
    return path


@pytest.fixture
def note_writer() -> Callable[..., Path]:
    return write_note


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Small vault: root links to alpha and beta; beta links back to alpha."""
    path = tmp_path / "notes"
    path.mkdir()
    write_note(path, "20240101T100000", "Root", ["20240102T100000", "20240103T100000"], keywords=["hub"])
    write_note(path, "20240102T100000", "Alpha")
    write_note(path, "20240103T100000", "Beta", ["20240102T100000"])
    return path
