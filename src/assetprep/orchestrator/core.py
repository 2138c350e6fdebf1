from __future__ import annotations

import json
import os
import sys
from datetime import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Union, List, Optional

from .logging import get_logger
from . import gate as gate_mod


# Allow static lists or callables that build paths from params
PathSpec = Union[List[str], Callable[[dict], List[str]]]


@dataclass
class TaskSpec:
    name: str
    inputs: PathSpec
    outputs: PathSpec
    fn: Callable[..., None]
    gate: Optional[PathSpec] = field(default=None)


def task(name: str, inputs: PathSpec, outputs: PathSpec, gate: Optional[PathSpec] = None):
    """Decorator to declare a task on a function.

    The wrapped function should accept a single dict `params` (parsed config).
    When `gate` is given, the task is skipped as soon as any gate path exists.
    """

    def deco(fn: Callable[..., None]):
        spec = TaskSpec(name=name, inputs=inputs, outputs=outputs, fn=fn, gate=gate)
        setattr(fn, "_task_spec", spec)
        return fn

    return deco


def topo_sort(nodes: Iterable[str], edges: Iterable[tuple[str, str]]) -> list[str]:
    nodes = list(nodes)
    incoming = {n: set() for n in nodes}
    outgoing = {n: set() for n in nodes}
    for u, v in edges:
        if u not in incoming or v not in incoming:
            raise ValueError(f"Edge references unknown node: {(u, v)}")
        outgoing[u].add(v)
        incoming[v].add(u)
    ordered: list[str] = []
    # Reversed so that independent nodes keep their declaration order
    roots = [n for n in reversed(nodes) if not incoming[n]]
    while roots:
        n = roots.pop()
        ordered.append(n)
        for m in sorted(outgoing[n], key=nodes.index, reverse=True):
            incoming[m].discard(n)
            outgoing[n].discard(m)
            if not incoming[m]:
                roots.append(m)
    if any(incoming[n] for n in nodes):
        raise ValueError("Cycle detected in DAG")
    return ordered


def chain(names: Iterable[str]) -> list[tuple[str, str]]:
    """Edges that force strictly sequential execution of `names`."""
    names = list(names)
    return list(zip(names, names[1:]))


class Pipeline:
    def __init__(
        self,
        tasks: dict[str, TaskSpec],
        edges: list[tuple[str, str]],
        name: str = "pipeline",
    ):
        self.name = name
        self.tasks = tasks
        self.edges = edges
        self.order = topo_sort(tasks.keys(), edges)
        self.logger = get_logger(f"orchestrator.{self.name}")

    def _select_subset(
        self, from_step: str | None, until_step: str | None, only_step: str | None
    ) -> list[str]:
        if only_step:
            if only_step not in self.tasks:
                raise KeyError(f"Unknown step: {only_step}")
            return [only_step]
        ordered = self.order
        if from_step:
            if from_step not in self.tasks:
                raise KeyError(f"Unknown step: {from_step}")
            start_idx = ordered.index(from_step)
            ordered = ordered[start_idx:]
        if until_step:
            if until_step not in self.tasks:
                raise KeyError(f"Unknown step: {until_step}")
            end_idx = ordered.index(until_step)
            ordered = ordered[: end_idx + 1]
        return ordered

    def run(
        self,
        params: dict,
        from_step: str | None = None,
        until_step: str | None = None,
        only_step: str | None = None,
    ) -> list[dict]:
        run_id = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
        runs_dir = params.get("project", {}).get("runs_dir")
        run_dir: Path | None = None
        if runs_dir:
            root = Path(params.get("project", {}).get("root", "."))
            run_dir = root / runs_dir / self.name / run_id
            os.makedirs(run_dir, exist_ok=True)

        selected = self._select_subset(from_step, until_step, only_step)
        self.logger.info("Selected steps: %s", " → ".join(selected))

        state = {
            "pipeline": self.name,
            "run_id": run_id,
            "steps": [],
            "python": sys.version,
        }

        for step_name in selected:
            spec = self.tasks[step_name]
            step_logger = get_logger(f"orchestrator.{self.name}.{step_name}")

            try:
                gate_paths = _resolve_paths(spec.gate, params)
                hit = gate_mod.first_existing(gate_paths)
                if hit is not None:
                    step_logger.info(
                        "Skip (%s already exists): %s", hit.path, step_name
                    )
                    state["steps"].append({"name": step_name, "status": "skipped"})
                    _write_state(run_dir, state)
                    continue

                missing = [
                    p for p in _resolve_paths(spec.inputs, params) if not Path(p).exists()
                ]
                if missing:
                    raise FileNotFoundError(
                        f"Missing inputs for {step_name}: {', '.join(missing)}"
                    )

                step_logger.info("Run: %s", step_name)
                spec.fn(params=params)
            except Exception as e:  # noqa: BLE001
                step_logger.exception("Step failed (%s)", step_name)
                state["steps"].append(
                    {"name": step_name, "status": "error", "error": str(e)}
                )
                _write_state(run_dir, state)
                raise

            outputs = _resolve_paths(spec.outputs, params)
            step_logger.debug("Outputs: %s", ", ".join(outputs))
            state["steps"].append(
                {"name": step_name, "status": "ok", "outputs": outputs}
            )
            _write_state(run_dir, state)

        return [dict(s) for s in state["steps"]]


def _write_state(run_dir: Path | None, state: dict) -> None:
    if run_dir is None:
        return
    with open(run_dir / "state.json", "w", encoding="utf-8") as f:
        json.dump(state, f, indent=2)


def _resolve_paths(paths_spec: Optional[PathSpec], params: dict) -> list[str]:
    """Resolve a static list of paths or a callable(PathSpec) into a list[str].

    Callables receive the full params dict and must return a list of path strings.
    """
    if paths_spec is None:
        return []
    if callable(paths_spec):
        paths = paths_spec(params)
    else:
        paths = paths_spec
    if paths is None:
        return []
    # Normalize to strings
    out: list[str] = []
    for p in paths:
        out.append(str(p))
    return out
