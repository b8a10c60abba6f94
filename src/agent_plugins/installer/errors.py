"""Installer exceptions."""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for installer failures."""


class RegistryError(InstallerError):
    """The marketplace registry document is missing or malformed. Fatal for a run."""


class GitError(InstallerError):
    """A git command failed, timed out, or git is not installed."""

    def __init__(self, cmd: list[str], message: str):
        self.cmd = cmd
        super().__init__(f"{' '.join(cmd)}: {message}")


class ArtifactNotFoundError(InstallerError):
    """The pre-built OpenCode bundle for a plugin does not exist."""


class StateFileError(InstallerError):
    """A persisted state document exists but is not a JSON object."""


class UserCancelled(Exception):
    """Raised by the presentation layer when the user aborts a prompt."""
