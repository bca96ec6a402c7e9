"""Pydantic schemas for the drillbit.toml manifest.

Each entry of the ``[plugins]`` table maps a short plugin key to exactly one
source tag:

    [plugins]
    explorer = { local = "plugins/Explorer.rbxm" }
    hoarcekat = { cloud = 4621580428 }
    tagger = { github = "https://github.com/org/repo/releases/download/v1/Tagger.rbxmx" }
"""

from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Common Types
# =============================================================================

SourceKind = Literal["local", "cloud", "github"]

# Extensions a local plugin file may have
ALLOWED_EXTENSIONS = ("rbxm", "rbxmx", "lua", "luau")

U64_MAX = 2**64 - 1


# =============================================================================
# Plugin Source Models
# =============================================================================


class LocalSource(BaseModel):
    """A plugin file relative to the manifest's directory."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    local: str = Field(min_length=1, strict=True)

    @property
    def kind(self) -> SourceKind:
        return "local"

    @property
    def path(self) -> PurePosixPath:
        """The relative path, normalized to forward slashes."""
        return PurePosixPath(self.local.replace("\\", "/"))

    @property
    def extension(self) -> str:
        """File extension without the leading dot, or "" if there is none."""
        return self.path.suffix[1:]

    def describe(self) -> str:
        return self.local


class CloudSource(BaseModel):
    """A Roblox asset resolved through the authenticated asset API."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    cloud: int = Field(ge=0, le=U64_MAX, strict=True)

    @property
    def kind(self) -> SourceKind:
        return "cloud"

    def describe(self) -> str:
        return str(self.cloud)


class GitHubSource(BaseModel):
    """A direct download URL, typically a GitHub release asset."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    github: str = Field(min_length=1, strict=True)

    @property
    def kind(self) -> SourceKind:
        return "github"

    def describe(self) -> str:
        return self.github


PluginSource = LocalSource | CloudSource | GitHubSource


# =============================================================================
# Manifest
# =============================================================================


class Manifest(BaseModel):
    """The parsed drillbit.toml file."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    plugins: dict[str, PluginSource] = Field(default_factory=dict)
