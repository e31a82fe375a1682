from __future__ import annotations

import os
from pathlib import Path


def load_dotenv_if_present(path: str | None = None) -> None:
    """
    Lightweight .env loader used for local runs of the report.

    - Reads KEY=VALUE pairs from the given file (default: ".env" in CWD).
    - Ignores empty lines and comments starting with "#".
    - Strips matching single/double quotes around values.
    - Does *not* overwrite variables that are already present in os.environ.

    When the file does not exist the call is a no-op, so the report can
    also be configured purely through the environment or CLI flags.
    """
    env_path = Path(path or ".env")
    if not env_path.exists():
        return

    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError:
        return

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        if not key:
            continue
        # Existing environment wins over the file.
        if key not in os.environ:
            os.environ[key] = value


def env_int(name: str, default: int) -> int:
    """Read an integer setting from the environment, falling back to `default`."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from exc


def env_float(name: str, default: float) -> float:
    """Read a float setting from the environment, falling back to `default`."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a number, got {raw!r}") from exc


__all__ = ["load_dotenv_if_present", "env_int", "env_float"]
