"""Rendering of the documents written into a new Unity package.

Provides the Jinja2-backed :class:`TemplateRenderer`, which loads templates
from the ``unipack/scaffolder/templates/`` directory, and the module-level
``render_*`` functions that produce the text of every file the package
creator writes.  JSON documents are built from the models in
:mod:`unipack.scaffolder.models`; only the C# boilerplate goes through a
template.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from unipack.scaffolder.models import AssemblyDefinition, PackageManifest


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_SCRIPT_TEMPLATE = "DefaultScript.cs.j2"
EDITOR_PLATFORM = "Editor"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for package scaffolding.

    The renderer loads ``.j2`` templates from a configurable template
    directory.  Undefined variables raise instead of rendering as
    empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["csharp_identifier"] = _csharp_identifier_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"DefaultScript.cs.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Package documents
# ---------------------------------------------------------------------------


def package_id(package_name: str, organization: str) -> str:
    """Return the reverse-domain id ``com.<organization>.<name>``."""
    return f"com.{organization}.{package_name.lower()}"


def runtime_assembly_name(package_name: str) -> str:
    return f"{package_name}.Runtime"


def editor_assembly_name(package_name: str) -> str:
    return f"{package_name}.Editor"


def build_manifest(
    package_name: str,
    description: str,
    organization: str,
    *,
    version: str = "0.0.1",
    unity: str = "2021.3",
) -> PackageManifest:
    """Build the ``package.json`` model for a package.

    *package_name* and *organization* are expected to be normalised already;
    the display name is the package name as given.
    """
    return PackageManifest(
        name=package_id(package_name, organization),
        version=version,
        display_name=package_name,
        description=description,
        unity=unity,
    )


def render_manifest(
    package_name: str,
    description: str,
    organization: str,
    *,
    version: str = "0.0.1",
    unity: str = "2021.3",
) -> str:
    """Return the text of ``package.json``."""
    manifest = build_manifest(
        package_name, description, organization, version=version, unity=unity
    )
    return manifest.to_json()


def render_runtime_asmdef(package_name: str) -> str:
    """Return the text of ``<name>.Runtime.asmdef``."""
    return AssemblyDefinition(name=runtime_assembly_name(package_name)).to_json()


def render_editor_asmdef(package_name: str) -> str:
    """Return the text of ``<name>.Editor.asmdef``.

    The editor assembly references the runtime assembly and only compiles
    inside the Unity Editor.
    """
    asmdef = AssemblyDefinition(
        name=editor_assembly_name(package_name),
        references=[runtime_assembly_name(package_name)],
        include_platforms=[EDITOR_PLATFORM],
    )
    return asmdef.to_json()


def render_default_script(
    package_name: str, renderer: TemplateRenderer | None = None
) -> str:
    """Return the C# source of ``<name>_DefaultScript.cs``."""
    renderer = renderer or TemplateRenderer()
    context = {
        "package_name": package_name,
        "greeting": f"Hello World! this is the package {package_name}",
    }
    return renderer.render(DEFAULT_SCRIPT_TEMPLATE, context)


def default_script_filename(package_name: str) -> str:
    return f"{package_name}_DefaultScript.cs"


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _csharp_identifier_filter(value: str) -> str:
    """Turn ``My-Package.2`` into the C# identifier ``My_Package_2``."""
    identifier = re.sub(r"[^0-9A-Za-z_]", "_", value)
    if not identifier or identifier[0].isdigit():
        identifier = f"_{identifier}"
    return identifier
