"""Browse command - move around a note tree with single keys."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import click
from rich.console import Console

from ..config import TreeConfig
from ..errors import NoteNotFound, NotetreeError
from ..tree.builder import build_tree
from ..tree.navigator import Navigator
from ..tree.render import to_rich_text
from ..vault.store import DirectoryNoteStore

logger = logging.getLogger(__name__)

HELP = "n/p sibling  i child  u parent  o open  r re-root  g top  q quit  (digits: repeat count)"

# Arrow keys as returned by click.getchar on ANSI terminals
KEY_ALIASES = {
    "\x1b[A": "p",
    "\x1b[B": "n",
    "\x1b[C": "i",
    "\x1b[D": "u",
    "\r": "o",
    "\n": "o",
}


class Browser:
    """Dispatches keys to a Navigator and redraws the tree after each move."""

    def __init__(
        self,
        store: DirectoryNoteStore,
        config: TreeConfig,
        console: Console,
        edit: Callable[..., object] = click.edit,
    ):
        self.store = store
        self.config = config
        self.console = console
        self.edit = edit
        self.status = ""
        self.tree = None
        self.nav: Navigator | None = None

    def load(self, root: str) -> None:
        """Build a fresh tree at `root`; on failure the current tree stays."""
        tree = build_tree(root, self.store, self.config)
        self.tree = tree
        self.nav = Navigator(tree, on_move=self.draw)
        self.draw()

    def draw(self, position: int | None = None) -> None:
        if self.tree is None or self.nav is None:
            return
        highlight = self.nav.current if position is None else position
        self.console.clear()
        self.console.print(to_rich_text(self.tree, self.config, highlight=highlight), end="")
        self.console.print(HELP, style="dim")
        if self.status:
            self.console.print(self.status, style="yellow")
            self.status = ""

    def open_current(self) -> None:
        identifier = self.nav.identifier
        try:
            path = self.store.path_of(identifier)
        except NoteNotFound as e:
            self.status = str(e)
            return
        self.edit(filename=str(path), editor=self.config.editor)

    def reroot(self) -> None:
        identifier = self.nav.identifier
        try:
            self.load(identifier)
        except NotetreeError as e:
            logger.debug("Re-root at %s failed: %s", identifier, e)
            self.status = f"Error: {e}"
            self.draw()

    def dispatch(self, key: str, count: int = 1) -> bool:
        """Handle one command key. Returns False when the loop should stop."""
        key = KEY_ALIASES.get(key, key)
        if key == "q":
            return False
        if key == "n":
            self.nav.next_sibling(count)
        elif key == "p":
            self.nav.prev_sibling(count)
        elif key == "i":
            self.nav.enter_child()
        elif key == "u":
            self.nav.exit_to_parent()
        elif key == "g":
            self.nav.reset()
        elif key == "o":
            self.open_current()
            self.draw()
        elif key == "r":
            self.reroot()
        return True


def run_browse(
    vault_path: Path,
    root: str,
    *,
    config: TreeConfig | None = None,
    getchar: Callable[[], str] = click.getchar,
    console: Console | None = None,
    edit: Callable[..., object] = click.edit,
) -> int:
    """Interactive loop over the tree rooted at `root`.

    Returns:
        Exit code (0 = quit normally, 1 = the initial tree could not be built)
    """
    config = config or TreeConfig()
    console = console or Console()
    browser = Browser(DirectoryNoteStore(vault_path, config), config, console, edit=edit)

    try:
        browser.load(root)
    except NotetreeError as e:
        Console(stderr=True).print(f"Error: {e}", style="bold red")
        return 1

    digits = ""
    while True:
        key = getchar()
        if key.isdigit():
            digits += key
            continue
        count = int(digits) if digits else 1
        digits = ""
        if not browser.dispatch(key, count):
            break

    return 0
