"""Removal core for saferm.

This package contains the policy pipeline, the filesystem walkers, the
removal strategies, and the orchestration that ties them together.
"""

from saferm.core.config import EnvSettings, GnuModeError, RunConfig, Verbosity
from saferm.core.remover import RemovalAction, RemovalResult, Remover, get_remover
from saferm.core.runner import RemovalRun, RunSummary, build_pipeline, build_walker
from saferm.core.transform import Pipeline, Transformer
from saferm.core.walker import GivenWalker, RecurseWalker, Walker

__all__ = [
    "EnvSettings",
    "GivenWalker",
    "GnuModeError",
    "Pipeline",
    "RecurseWalker",
    "RemovalAction",
    "RemovalResult",
    "RemovalRun",
    "Remover",
    "RunConfig",
    "RunSummary",
    "Transformer",
    "Verbosity",
    "Walker",
    "build_pipeline",
    "build_walker",
    "get_remover",
]
