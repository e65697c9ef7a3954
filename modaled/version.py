from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import Optional

DIST_NAME = "modaled"


def _installed_version() -> Optional[str]:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None


def _git_commit() -> Optional[str]:
    here = Path(__file__).resolve().parent
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                      cwd=str(here), stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    # Installed metadata first, git checkout as a suffix when running from source
    version = _installed_version() or "unknown"
    commit = _git_commit() if os.path.isdir(Path(__file__).resolve().parent.parent / ".git") else None
    if commit:
        return f"{DIST_NAME} {version} ({commit})"
    return f"{DIST_NAME} {version}"
