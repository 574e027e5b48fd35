"""Run identifiers and environment facts for the manifest."""

import importlib.metadata
import platform
import secrets
import subprocess
import sys
from typing import Any

from maildedup.utils import get_iso_timestamp

__all__ = ["generate_run_id", "git_revision", "package_version", "environment_snapshot"]

# Distributions whose versions are recorded with every run.
RECORDED_DEPENDENCIES = ("click",)


def generate_run_id() -> str:
    """Return ``<UTC timestamp>__<8 hex chars>``, unique per run."""
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def git_revision() -> str | None:
    """Short commit hash of the current checkout, or None outside git."""
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short=7", "HEAD"],
            capture_output=True,
            text=True,
            check=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return completed.stdout.strip() or None


def _distribution_version(name: str) -> str:
    try:
        return importlib.metadata.version(name)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def package_version() -> str:
    return _distribution_version("maildedup")


def environment_snapshot() -> dict[str, Any]:
    """Interpreter, platform and dependency versions of this process."""
    return {
        "python_version": platform.python_version(),
        "platform": f"{platform.system()}-{platform.release()}-{platform.machine()}",
        "executable": sys.executable,
        "package_version": package_version(),
        "dependencies": {name: _distribution_version(name) for name in RECORDED_DEPENDENCIES},
    }
