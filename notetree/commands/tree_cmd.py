"""Tree command - print the link tree below a note."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console

from ..config import TreeConfig
from ..errors import NotetreeError
from ..tree.builder import build_tree
from ..tree.render import to_rich_text, tree_to_dict
from ..vault.store import DirectoryNoteStore


def run_tree(
    vault_path: Path,
    root: str,
    *,
    config: TreeConfig | None = None,
    fmt: str = "rich",
    out: Path | None = None,
) -> int:
    """Render the tree rooted at `root`.

    Args:
        vault_path: Directory holding the notes
        root: Identifier of the root note
        config: Rendering settings
        fmt: "rich" (styled), "text" (plain) or "json" (flat node records)
        out: Write output to this file instead of stdout

    Returns:
        Exit code (0 = success, 1 = note missing, unreadable or malformed)
    """
    console = Console(stderr=True)
    config = config or TreeConfig()
    store = DirectoryNoteStore(vault_path, config)

    try:
        tree = build_tree(root, store, config)
    except NotetreeError as e:
        console.print(f"Error: {e}", style="bold red")
        return 1

    if fmt == "json":
        text = json.dumps(tree_to_dict(tree), indent=2) + "\n"
    else:
        text = tree.text

    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote tree to {out}", style="green")
    elif fmt == "rich":
        Console().print(to_rich_text(tree, config), end="")
    else:
        print(text, end="")

    return 0


def run_links(vault_path: Path, identifier: str, *, config: TreeConfig | None = None) -> int:
    """Print the identifiers a note links to, in order."""
    from ..vault.parser import extract_links

    console = Console(stderr=True)
    store = DirectoryNoteStore(vault_path, config)
    try:
        links = extract_links(store.content(identifier))
    except NotetreeError as e:
        console.print(f"Error: {e}", style="bold red")
        return 1

    for target in links:
        print(target)
    return 0


def run_show(vault_path: Path, identifier: str, *, config: TreeConfig | None = None) -> int:
    """Print a note's attribute mapping; absent fields show as '-'."""
    from rich.table import Table

    console = Console(stderr=True)
    store = DirectoryNoteStore(vault_path, config)
    try:
        attributes = store.fetch(identifier)
    except NotetreeError as e:
        console.print(f"Error: {e}", style="bold red")
        return 1

    table = Table(title=identifier, show_header=False)
    table.add_column("field", style="bold")
    table.add_column("value")
    for name, value in attributes.items():
        table.add_row(name, "-" if value is None else value)
    Console().print(table)
    return 0


def run_list(vault_path: Path, *, config: TreeConfig | None = None) -> int:
    """Print every note's identifier and title, sorted by identifier.

    A note whose metadata cannot be read is still listed, with its error in
    place of the title; the exit code is then 1.
    """
    console = Console(stderr=True)
    store = DirectoryNoteStore(vault_path, config)
    failed = 0
    for identifier in store.identifiers():
        try:
            title = store.fetch(identifier).get("title")
        except NotetreeError as e:
            console.print(f"Error: {e}", style="bold red")
            failed += 1
            continue
        print(f"{identifier}  {title or ''}".rstrip())
    store.release_all()
    return 1 if failed else 0
