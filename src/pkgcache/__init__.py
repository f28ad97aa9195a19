"""resolve named, versioned packages to local directories."""

__version__ = "0.1.0"

from .domain.errors import (
    MalformedArchiveError,
    NetworkFailedError,
    PackageError,
    PackageNotFoundError,
    PkgcacheError,
    VersionError,
)
from .domain.models import PackageInfo, PackageSpec, PackageVersion, VersionlessPackageSpec
from .resolution.resolver import determine_latest_version
from .services.prepare import prepare_package

__all__ = [
    "MalformedArchiveError",
    "NetworkFailedError",
    "PackageError",
    "PackageNotFoundError",
    "PkgcacheError",
    "VersionError",
    "PackageInfo",
    "PackageSpec",
    "PackageVersion",
    "VersionlessPackageSpec",
    "determine_latest_version",
    "prepare_package",
]
