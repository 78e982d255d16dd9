"""dagette: lazy, memoised, fail-fast DAGs of async tasks.

Main components:
* `task`: Describe a node (label, ordered deps, compute function)
* `Executor` / `run`: Evaluate a node and everything it depends on
* `all_of`: Combine independent tasks into one tuple-valued task
* `trace` / `edges`: Inspect a graph without running it
"""

# Version info
__version__ = "0.1.0"

# Core components
from dagette.core.result import Ok, Err, Result, ok
from dagette.core.task import Task, TaskState, TaskHelpers, task
from dagette.core.executor import Executor, run
from dagette.core.combine import all_of
from dagette.core.graph import trace, edges

# Settings & errors
from dagette.config import Settings, configure, get_settings, load_settings_from_yaml
from dagette.errors import DagetteError, TaskFailed, ExecutorNotRunning, ExecutionCancelled

# Utility re-exports
from dagette.utils.dag import build_rich_tree, show_dag_tree

# Export all important symbols
__all__ = [
    # Data model
    "Ok",
    "Err",
    "Result",
    "Task",
    "TaskState",
    "TaskHelpers",

    # Functions
    "ok",
    "task",
    "run",
    "all_of",
    "trace",
    "edges",
    "build_rich_tree",
    "show_dag_tree",

    # Execution
    "Executor",

    # Config
    "Settings",
    "configure",
    "get_settings",
    "load_settings_from_yaml",

    # Errors
    "DagetteError",
    "TaskFailed",
    "ExecutorNotRunning",
    "ExecutionCancelled",
]
