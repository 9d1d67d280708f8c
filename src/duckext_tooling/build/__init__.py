"""Host-aware multi-platform extension build (native make or containerized make)."""

from .command import CommandResult, run_command
from .container import build_container
from .context import BuildContext, cross_compile_env
from .dispatch import dispatch
from .native import build_native
from .orchestrator import print_summary, run_all, summarize
from .result import (
    BuildError,
    BuildFailure,
    BuildResult,
    IOFailure,
    MissingDependency,
    PublishFailure,
    Unsupported,
)

__all__ = [
    "BuildContext",
    "BuildError",
    "BuildFailure",
    "BuildResult",
    "CommandResult",
    "IOFailure",
    "MissingDependency",
    "PublishFailure",
    "Unsupported",
    "build_container",
    "build_native",
    "cross_compile_env",
    "dispatch",
    "print_summary",
    "run_all",
    "run_command",
    "summarize",
]
