"""unipack scaffolder -- generates Unity package structures.

This module takes a ``PackageConfig`` as input and writes a package
directory with assembly definitions, a ``package.json`` manifest and the
optional extras selected in the config.

Quick usage::

    from unipack.scaffolder import PackageConfig, PackagesCreator

    config = PackageConfig(
        package_name="Widgets",
        package_author="Jane Doe",
        package_author_email="jane@example.com",
        organization="Acme",
    )
    creator = PackagesCreator()
    package_path = await creator.create_package(config)
"""

from unipack.scaffolder.generator import AssetHost, NullHost, PackageConfig, PackagesCreator
from unipack.scaffolder.templates import TemplateRenderer

__all__ = [
    "AssetHost",
    "NullHost",
    "PackageConfig",
    "PackagesCreator",
    "TemplateRenderer",
]
