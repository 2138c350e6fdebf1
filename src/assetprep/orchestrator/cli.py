from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Dict

import typer
import yaml
from dotenv import find_dotenv, load_dotenv

from .core import Pipeline, TaskSpec, chain
from .logging import attach_file_log, get_logger
from .utils import _get


# Before any logger exists, so a .env log level takes effect
load_dotenv(find_dotenv(usecwd=True))

app = typer.Typer(add_completion=False, help="Build-time static asset preparation")
log = get_logger("orchestrator.cli")

# Execution order of the full asset pipeline
PIPELINE = [
    "simplemde",
    "ace",
    "mathjax",
    "i18n",
    "preinit",
    "clear_cache",
]


def load_config(path: str | Path) -> dict:
    p = Path(path)
    with open(p, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def discover_tasks() -> Dict[str, TaskSpec]:
    """Import all modules in `tasks` package and collect decorated functions."""
    tasks_pkg = "assetprep.tasks"
    specs: Dict[str, TaskSpec] = {}
    try:
        pkg = importlib.import_module(tasks_pkg)
    except ModuleNotFoundError:
        log.warning("No tasks package found.")
        return specs
    for m in pkgutil.iter_modules(pkg.__path__, prefix=f"{tasks_pkg}."):
        try:
            mod = importlib.import_module(m.name)
        except Exception as e:  # noqa: BLE001
            log.warning("Failed to import %s: %s", m.name, e)
            continue
        for attr_name in dir(mod):
            obj = getattr(mod, attr_name)
            spec = getattr(obj, "_task_spec", None)
            if isinstance(spec, TaskSpec):
                specs[spec.name] = spec
    return specs


def _prepare(config: str) -> dict:
    params = load_config(config)
    attach_file_log(_get(params, "project", "log_file"))
    return params


@app.command("list")
def list_tasks():
    """List discovered tasks."""
    specs = discover_tasks()
    if not specs:
        typer.echo(
            "No tasks discovered. Create modules under `assetprep/tasks/` and decorate functions with @task()."
        )
        raise typer.Exit(code=0)
    typer.echo("Discovered tasks:")
    for name in sorted(specs.keys()):
        typer.echo(f"- {name}")


@app.command()
def run_task(
    name: str = typer.Argument(..., help="Task name to run"),
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
):
    """Run a single task by name. Existence gates still apply."""
    specs = discover_tasks()
    if name not in specs:
        typer.echo(f"Task not found: {name}")
        raise typer.Exit(code=1)
    params = _prepare(config)
    pipe = Pipeline(tasks={name: specs[name]}, edges=[], name=f"task.{name}")
    pipe.run(params=params, only_step=name)


@app.command()
def full_run(
    config: str = typer.Option("configs/base.yaml", help="Path to YAML config"),
    from_step: str = typer.Option("", help="Start from this step name"),
    until_step: str = typer.Option("", help="Stop after this step name"),
):
    """Run every asset preparation step in order."""
    specs = discover_tasks()
    missing = [r for r in PIPELINE if r not in specs]
    if missing:
        typer.echo("Missing required tasks: " + ", ".join(missing))
        raise typer.Exit(code=1)

    params = _prepare(config)
    pipe = Pipeline(
        tasks={k: specs[k] for k in PIPELINE}, edges=chain(PIPELINE), name="full_run"
    )
    steps = pipe.run(
        params=params,
        from_step=from_step or None,
        until_step=until_step or None,
    )
    skipped = sum(1 for s in steps if s["status"] == "skipped")
    typer.echo(f"Done: {len(steps) - skipped} built, {skipped} skipped")


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
