from pathlib import Path
from typing import Optional

import platformdirs

from ..config import APP_NAME
from ..domain.models import PackageSpec, VersionlessPackageSpec


def _platform_root(kind: str) -> Optional[Path]:
    try:
        if kind == "data":
            root = platformdirs.user_data_dir()
        else:
            root = platformdirs.user_cache_dir()
    except (OSError, RuntimeError):
        return None
    if not root:
        return None
    return Path(root) / APP_NAME / "packages"


class PackageDirs:
    """
    computes where packages live on disk.
    
    both roots point at a `packages` directory; a package occupies
    `<root>/<namespace>/<name>/<version>`. a root of None means the platform
    does not provide that directory and it is skipped.
    """

    def __init__(self, data_root: Optional[Path], cache_root: Optional[Path]):
        self.data_root = data_root
        self.cache_root = cache_root

    @classmethod
    def from_platform(
        cls,
        package_path: Optional[Path] = None,
        package_cache_path: Optional[Path] = None,
    ) -> "PackageDirs":
        return cls(
            data_root=package_path or _platform_root("data"),
            cache_root=package_cache_path or _platform_root("cache"),
        )

    @staticmethod
    def subdir(spec: PackageSpec) -> Path:
        return Path(spec.namespace) / spec.name / str(spec.version)

    def persistent_path(self, spec: PackageSpec) -> Optional[Path]:
        if self.data_root is None:
            return None
        return self.data_root / self.subdir(spec)

    def cache_path(self, spec: PackageSpec) -> Optional[Path]:
        if self.cache_root is None:
            return None
        return self.cache_root / self.subdir(spec)

    def local_versions_dir(self, spec: VersionlessPackageSpec) -> Optional[Path]:
        """directory holding the locally installed versions of a package (data root only)."""
        if self.data_root is None:
            return None
        return self.data_root / spec.namespace / spec.name
