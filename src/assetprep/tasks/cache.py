"""Clear the fuse-box bundler cache before packaging."""

from ..orchestrator import task
from ..orchestrator.gate import empty_dir
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import project_path

logger = get_logger("tasks.cache")


@task(
    name="clear_cache",
    inputs=[],
    outputs=lambda p: [project_path(p, "cache", "dir", default=".fusebox")],
)
def clear_cache(params: dict):
    cache_dir = project_path(params, "cache", "dir", default=".fusebox")
    logger.info("Clearing bundler cache %s", cache_dir)
    empty_dir(cache_dir)
