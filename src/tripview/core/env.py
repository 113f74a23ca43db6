"""
`.env` loading and itinerary path resolution.

Local overrides (log level, itinerary path) may live in a `.env` at the checkout
root. The nearest `.env` found from the working directory upwards marks that root,
so `data/itinerary.yaml` resolves the same way from any subdirectory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


@lru_cache
def load_dotenv_if_present() -> Path | None:
    """Load the nearest `.env` once; returns its path, or None when there is none.

    Never overrides env vars already set in the process environment.
    """
    found = find_dotenv(usecwd=True)
    if not found:
        return None
    load_dotenv(dotenv_path=found, override=False)
    return Path(found).resolve()


def resolve_project_path(path: str | Path) -> Path:
    """Resolve a relative path against the `.env` directory, else the working directory."""
    p = Path(path).expanduser()
    if p.is_absolute():
        return p
    env_path = load_dotenv_if_present()
    base = env_path.parent if env_path is not None else Path.cwd()
    return (base / p).resolve()
