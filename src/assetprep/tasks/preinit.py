"""Bundle the client pre-init scripts into a single file."""

from pathlib import Path

from ..orchestrator import task
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import project_path
from .minify import join_statements

logger = get_logger("tasks.preinit")


def _source(p) -> Path:
    return project_path(p, "preinit", "source", default="client/js/pre-init")


def _output(p) -> Path:
    return project_path(p, "preinit", "output", default=".build/_preinit.js")


@task(
    name="preinit",
    inputs=lambda p: [_source(p)],
    outputs=lambda p: [_output(p)],
)
def preinit(params: dict):
    src = _source(params)
    out = _output(params)
    fragments = sorted(f for f in src.iterdir() if f.is_file())
    logger.info("Bundling %d pre-init scripts into %s", len(fragments), out)
    content = join_statements(f.read_text(encoding="utf-8") for f in fragments)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
