"""Git checkouts: clone-or-pull sync and revision lookup."""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading
from pathlib import Path

from .errors import GitError

logger = logging.getLogger(__name__)


def _run_git(args: list[str], timeout: int, cwd: Path | None = None) -> str:
    cmd = ["git", *args]
    logger.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise GitError(cmd, "git executable not found") from e
    except subprocess.TimeoutExpired as e:
        raise GitError(cmd, f"timed out after {timeout}s") from e
    if result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip() or f"exit {result.returncode}"
        raise GitError(cmd, detail)
    return result.stdout


def is_checkout(path: Path) -> bool:
    return path.is_dir() and (path / ".git").exists()


def sync_repo(url: str, dest: Path, branch: str = "main", timeout: int = 300) -> None:
    """Pull *branch* if *dest* is a checkout, else replace *dest* with a fresh clone."""
    if is_checkout(dest):
        _run_git(["pull", "origin", branch], timeout, cwd=dest)
        return
    if dest.is_dir():
        logger.debug("removing stale non-repo directory %s", dest)
        shutil.rmtree(dest)
    elif dest.exists():
        dest.unlink()
    dest.parent.mkdir(parents=True, exist_ok=True)
    _run_git(["clone", "--branch", branch, url, str(dest)], timeout)


def head_revision(repo: Path, timeout: int = 300) -> str:
    return _run_git(["rev-parse", "HEAD"], timeout, cwd=repo).strip()


class MarketplaceSync:
    """Run-scoped sync of the shared marketplace checkout.

    The first successful sync is reused for the rest of the run; a failed
    sync is retried by the next caller.
    """

    def __init__(self, url: str, dest: Path, branch: str = "main", timeout: int = 300):
        self.url = url
        self.dest = dest
        self.branch = branch
        self.timeout = timeout
        self._lock = threading.Lock()
        self._synced = False

    @property
    def synced(self) -> bool:
        return self._synced

    def ensure(self) -> Path:
        with self._lock:
            if not self._synced:
                sync_repo(self.url, self.dest, self.branch, self.timeout)
                self._synced = True
        return self.dest
