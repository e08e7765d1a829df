"""unipack -- scaffolds Unity packages from the command line."""

from unipack.config import CreatorSettings
from unipack.scaffolder import PackageConfig, PackagesCreator

__all__ = ["CreatorSettings", "PackageConfig", "PackagesCreator"]

__version__ = "0.1.0"
