"""Pydantic models for the JSON documents written into a Unity package.

Both documents are serialised from these models rather than assembled from
text, so package names or descriptions containing quotes, braces or
backslashes always produce valid JSON.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _UnityDocument(BaseModel):
    """Base for documents using camelCase keys on disk."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        """Serialise with on-disk key names and a trailing newline."""
        return self.model_dump_json(by_alias=True, indent=4) + "\n"


class PackageManifest(_UnityDocument):
    """``package.json`` describing a package's identity."""

    name: str = Field(..., description="Reverse-domain package id")
    version: str = Field(default="0.0.1")
    display_name: str
    description: str = Field(default="")
    unity: str = Field(default="2021.3", description="Minimum Unity version")
    dependencies: dict[str, str] = Field(default_factory=dict)


class AssemblyDefinition(_UnityDocument):
    """``.asmdef`` module descriptor declaring a compilation unit."""

    name: str
    references: list[str] = Field(default_factory=list)
    include_platforms: list[str] = Field(default_factory=list)
    exclude_platforms: list[str] = Field(default_factory=list)
    allow_unsafe_code: bool = False
    override_references: bool = False
    precompiled_references: list[str] = Field(default_factory=list)
    auto_referenced: bool = True
    define_constraints: list[str] = Field(default_factory=list)
    version_defines: list[dict[str, Any]] = Field(default_factory=list)
    no_engine_references: bool = False
