from __future__ import annotations

"""DAG helpers (no side-effects).

iter_nodes(task) yields (depth, task, first_visit) depth-first.
build_rich_tree(task) returns a Rich *Tree* ready for printing.
"""
from dataclasses import dataclass
from typing import Iterator, Set, Tuple

from rich.markup import escape
from rich.tree import Tree

from dagette.core.result import Err
from dagette.core.task import Task, TaskState
from dagette.utils.constants import ASCII_SYMBOLS, STYLE, SYMBOLS

__all__ = [
    "RenderOptions",
    "iter_nodes",
    "build_rich_tree",
    "show_dag_tree",
]


@dataclass
class RenderOptions:  # noqa: D101
    icons_on: bool = True  # False → plain ASCII markers
    show_state: bool = True


# --------------------------------------------------------------------------- #
# Core traverser
# --------------------------------------------------------------------------- #

def iter_nodes(root: Task) -> Iterator[Tuple[int, Task, bool]]:  # noqa: D401
    """Yield *(depth, task, first_visit)* from *root* down to the leaves (DFS).

    A shared dependency is yielded every time it is reached but only its first
    visit descends into its own dependencies.
    """
    seen: Set[str] = set()

    def _walk(t: Task, depth: int):
        first = t.id not in seen
        seen.add(t.id)
        yield depth, t, first
        if first:
            for dep in t.deps:
                yield from _walk(dep, depth + 1)

    yield from _walk(root, 0)


# --------------------------------------------------------------------------- #
# Rich tree builder
# --------------------------------------------------------------------------- #

def _marker(t: Task, symbols: dict) -> str:
    state = t.state
    if state is TaskState.SETTLED:
        return symbols["settled_err"] if isinstance(t.result, Err) else symbols["settled_ok"]
    return symbols[state.value]


def build_rich_tree(root: Task, opts: RenderOptions | None = None) -> Tree:  # noqa: D401
    """Return a *rich.tree.Tree* of *root* and its dependencies (side-effect-free)."""
    opts = opts or RenderOptions()
    symbols = SYMBOLS if opts.icons_on else ASCII_SYMBOLS

    tree = Tree(f"[{STYLE['header']}]Task DAG[/]")
    parents = {-1: tree}
    for depth, t, first in iter_nodes(root):
        marker = _marker(t, symbols) if opts.show_state else ""
        label = escape(t.label)
        if first:
            text = f"{marker}[{STYLE['label']}]{label}[/]"
            if isinstance(t.result, Err) and t.result.origin is not t:
                text += f" [{STYLE['error']}](from {escape(t.result.origin.label)})[/]"
        else:
            text = f"[{STYLE['shared']}]{symbols['shared']}{label}[/]"
        parents[depth] = parents[depth - 1].add(text)
    return tree


def show_dag_tree(root: Task, **kw) -> None:  # noqa: D401
    """Print the tree of *root* to the dagette console (stderr)."""
    from dagette.utils.logging import console

    console.print(build_rich_tree(root, **kw))
