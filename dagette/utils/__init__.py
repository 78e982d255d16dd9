# This file makes the 'utils' directory a Python package.

"""dagette utilities."""

from .dag import RenderOptions, build_rich_tree, iter_nodes, show_dag_tree
from .logging import disable_rich_logging, enable_rich_logging

__all__ = [
    "RenderOptions",
    "build_rich_tree",
    "iter_nodes",
    "show_dag_tree",
    "enable_rich_logging",
    "disable_rich_logging",
]
