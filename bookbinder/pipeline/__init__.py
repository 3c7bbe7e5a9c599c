"""Stage registry, runner, and core stages of the bookbinder build pipeline."""

from .registry import Stage, StageHandler, StageRegistry
from .runner import Pipeline
from .stages import register_core_stages
from .streams import collect, restream, transform

__all__ = [
    "Pipeline",
    "Stage",
    "StageHandler",
    "StageRegistry",
    "collect",
    "register_core_stages",
    "restream",
    "transform",
]
