"""Copy the prebuilt SimpleMDE editor bundle into the assets tree."""

import shutil

from ..orchestrator import task
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import asset_path, project_path

logger = get_logger("tasks.simplemde")


def _source(p):
    return project_path(
        p, "simplemde", "source", default="node_modules/simplemde/dist/simplemde.min.js"
    )


@task(
    name="simplemde",
    inputs=lambda p: [_source(p)],
    outputs=lambda p: [asset_path(p, "simplemde", "simplemde") / "simplemde.min.js"],
    gate=lambda p: [asset_path(p, "simplemde", "simplemde")],
)
def simplemde(params: dict):
    src = _source(params)
    dest = asset_path(params, "simplemde", "simplemde") / src.name
    logger.info("Copy SimpleMDE to %s", dest)
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(src, dest)
