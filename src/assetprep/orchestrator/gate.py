"""Existence gate used to decide whether a build step already ran.

Presence of the output directory is the only staleness signal: nothing is
hashed and changed sources do not trigger a rebuild.
"""

from __future__ import annotations

import enum
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional


class Presence(enum.Enum):
    EXISTS = "exists"
    ABSENT = "absent"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Probe:
    path: Path
    presence: Presence
    error: Optional[OSError] = None

    def __post_init__(self):
        if self.presence is Presence.UNKNOWN and self.error is None:
            raise ValueError(f"Unknown presence for {self.path} needs the probe error")

    @property
    def exists(self) -> bool:
        return self.presence is Presence.EXISTS


def probe(path: str | os.PathLike) -> Probe:
    """Stat ``path`` and report whether it exists, is absent, or could not be checked."""
    p = Path(path)
    try:
        os.stat(p)
    except FileNotFoundError:
        return Probe(p, Presence.ABSENT)
    except OSError as e:
        return Probe(p, Presence.UNKNOWN, e)
    return Probe(p, Presence.EXISTS)


def first_existing(paths: Iterable[str | os.PathLike]) -> Optional[Probe]:
    """Return the first probe that exists, raising on an indeterminate probe."""
    for p in paths:
        result = probe(p)
        if result.presence is Presence.UNKNOWN and result.error is not None:
            raise result.error
        if result.exists:
            return result
    return None


def ensure_dir(path: str | os.PathLike) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def empty_dir(path: str | os.PathLike) -> Path:
    """Leave ``path`` as an existing, empty directory."""
    p = Path(path)
    if not p.exists():
        p.mkdir(parents=True)
        return p
    for child in p.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
    return p
