"""Sequential task runner for the asset preparation pipeline.

Provides Task and Pipeline primitives, existence gating, a bounded worker
pool, and a Typer CLI.
"""

from .core import TaskSpec, Pipeline, task  # re-export for convenience

__all__ = ["TaskSpec", "Pipeline", "task"]
