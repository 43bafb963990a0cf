# leafkit/leafs/manifest.py
from __future__ import annotations
from typing import Any, Literal

from pydantic import BaseModel, Field, ConfigDict

__all__ = [
    "LeafEnvVar",
    "LeafRequirement",
    "LeafConfigSnippet",
    "LeafRouteInfo",
    "LeafCommandInfo",
    "LeafManifest",
]

RequirementType = Literal["model", "file", "directory"]



class LeafEnvVar(BaseModel):
    """An environment variable the leaf reads at runtime."""
    model_config = ConfigDict(extra="ignore")

    key: str
    description: str = ""
    required: bool = False
    example: str = ""
    default: str | None = None



class LeafRequirement(BaseModel):
    """
    A prerequisite the leaf expects in the host project.

    With `path` set, only that path is checked; otherwise conventional
    locations for `type` are searched.
    """
    model_config = ConfigDict(extra="ignore", frozen=True)

    type: RequirementType
    name: str
    path: str | None = None
    description: str = ""
    hint: str | None = None



class LeafConfigSnippet(BaseModel):
    """Import line and example config block shown to whoever installs the leaf."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    importPath: str = Field(default="", alias="import")
    example: dict[str, Any] = Field(default_factory=dict)



class LeafRouteInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    description: str = ""
    methods: list[str] = Field(default_factory=list)



class LeafCommandInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    description: str = ""



class LeafManifest(BaseModel):
    """Represents a validated leaf manifest (leaf.json)."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str
    version: str
    description: str = ""
    author: str | None = None
    dependencies: list[str] = Field(default_factory=list)
    requirements: list[LeafRequirement] = Field(default_factory=list)
    npmDependencies: dict[str, str] = Field(default_factory=dict, alias="npm_dependencies")
    env: list[LeafEnvVar] = Field(default_factory=list)
    config: LeafConfigSnippet | None = None
    models: list[str] = Field(default_factory=list)
    routes: dict[str, LeafRouteInfo] = Field(default_factory=dict)
    services: list[str] = Field(default_factory=list)
    commands: list[LeafCommandInfo] = Field(default_factory=list)

    def uniqueDependencies(self) -> list[str]:
        """Declared dependencies without duplicates, in declaration order."""
        return list(dict.fromkeys(self.dependencies))

    def requiredEnv(self) -> list[LeafEnvVar]:
        return [env for env in self.env if env.required]

    def optionalEnv(self) -> list[LeafEnvVar]:
        return [env for env in self.env if not env.required]
