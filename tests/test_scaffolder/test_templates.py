"""Unit tests for package document rendering (unipack.scaffolder.templates).

Tests cover:
- package.json content and escaping
- Runtime / Editor assembly definitions
- The default C# script template
- TemplateRenderer.render and its custom filter
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from jinja2 import UndefinedError

from unipack.scaffolder.models import AssemblyDefinition, PackageManifest
from unipack.scaffolder.templates import (
    TemplateRenderer,
    build_manifest,
    default_script_filename,
    package_id,
    render_default_script,
    render_editor_asmdef,
    render_manifest,
    render_runtime_asmdef,
)

ASMDEF_KEYS = [
    "name",
    "references",
    "includePlatforms",
    "excludePlatforms",
    "allowUnsafeCode",
    "overrideReferences",
    "precompiledReferences",
    "autoReferenced",
    "defineConstraints",
    "versionDefines",
    "noEngineReferences",
]


class TestManifest:
    @pytest.mark.unit
    def test_fields(self):
        data = json.loads(render_manifest("Foo", "Bar", "acme"))
        assert data == {
            "name": "com.acme.foo",
            "version": "0.0.1",
            "displayName": "Foo",
            "description": "Bar",
            "unity": "2021.3",
            "dependencies": {},
        }

    @pytest.mark.unit
    def test_key_order(self):
        data = json.loads(render_manifest("Foo", "", "acme"))
        assert list(data) == ["name", "version", "displayName", "description", "unity", "dependencies"]

    @pytest.mark.unit
    def test_overridable_version_and_unity(self):
        data = json.loads(render_manifest("Foo", "", "acme", version="1.2.3", unity="2022.3"))
        assert data["version"] == "1.2.3"
        assert data["unity"] == "2022.3"

    @pytest.mark.unit
    def test_special_characters_are_escaped(self):
        description = 'Uses "quotes", {braces} and back\\slashes'
        data = json.loads(render_manifest('Fo"o', description, "acme"))
        assert data["description"] == description
        assert data["displayName"] == 'Fo"o'

    @pytest.mark.unit
    def test_package_id(self):
        assert package_id("My_Cool_Thing", "my_org") == "com.my_org.my_cool_thing"

    @pytest.mark.unit
    def test_build_manifest_returns_model(self):
        manifest = build_manifest("Foo", "Bar", "acme")
        assert isinstance(manifest, PackageManifest)
        assert manifest.display_name == "Foo"


class TestAssemblyDefinitions:
    @pytest.mark.unit
    def test_runtime(self):
        data = json.loads(render_runtime_asmdef("Foo"))
        assert list(data) == ASMDEF_KEYS
        assert data["name"] == "Foo.Runtime"
        assert data["references"] == []
        assert data["includePlatforms"] == []
        assert data["excludePlatforms"] == []
        assert data["allowUnsafeCode"] is False
        assert data["overrideReferences"] is False
        assert data["precompiledReferences"] == []
        assert data["autoReferenced"] is True
        assert data["defineConstraints"] == []
        assert data["versionDefines"] == []
        assert data["noEngineReferences"] is False

    @pytest.mark.unit
    def test_editor(self):
        data = json.loads(render_editor_asmdef("Foo"))
        assert list(data) == ASMDEF_KEYS
        assert data["name"] == "Foo.Editor"
        assert data["references"] == ["Foo.Runtime"]
        assert data["includePlatforms"] == ["Editor"]
        assert data["excludePlatforms"] == []
        assert data["autoReferenced"] is True

    @pytest.mark.unit
    def test_model_accepts_field_names(self):
        asmdef = AssemblyDefinition(name="X", include_platforms=["Editor"])
        assert asmdef.include_platforms == ["Editor"]


class TestDefaultScript:
    @pytest.mark.unit
    def test_contains_type_and_greeting(self):
        source = render_default_script("Widgets")
        assert "namespace Widgets" in source
        assert "public class Widgets_DefaultScript : MonoBehaviour" in source
        assert 'Debug.Log("Hello World! this is the package Widgets");' in source

    @pytest.mark.unit
    def test_identifier_is_sanitized(self):
        source = render_default_script("my-pkg.2")
        assert "namespace my_pkg_2" in source
        assert "class my_pkg_2_DefaultScript" in source
        assert "this is the package my-pkg.2" in source

    @pytest.mark.unit
    def test_leading_digit_identifier(self):
        source = render_default_script("2D")
        assert "namespace _2D" in source

    @pytest.mark.unit
    def test_quotes_in_name_stay_inside_literal(self):
        source = render_default_script('Say"Hi')
        assert 'Say\\"Hi' in source

    @pytest.mark.unit
    def test_filename(self):
        assert default_script_filename("Widgets") == "Widgets_DefaultScript.cs"


class TestTemplateRenderer:
    @pytest.mark.unit
    def test_render_uses_csharp_identifier_filter(self, tmp_path: Path):
        (tmp_path / "ident.j2").write_text("{{ name|csharp_identifier }}", encoding="utf-8")
        assert TemplateRenderer(tmp_path).render("ident.j2", {"name": "a-b"}) == "a_b"

    @pytest.mark.unit
    def test_undefined_variable_raises(self, tmp_path: Path):
        (tmp_path / "missing.j2").write_text("{{ missing }}", encoding="utf-8")
        with pytest.raises(UndefinedError):
            TemplateRenderer(tmp_path).render("missing.j2", {})
