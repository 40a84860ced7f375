from __future__ import annotations
from typing import Optional


class BuildError(RuntimeError):
    """Base for failures that abort a build. `category` names the failure class shown to the user."""
    category = "build"


class MissingCredentialError(BuildError):
    category = "precondition"


class ConfigError(BuildError):
    category = "config"


class ProviderError(BuildError):
    category = "provider"

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status
