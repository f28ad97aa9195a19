import logging
from pathlib import Path

from ..domain.errors import PackageNotFoundError
from ..domain.models import PackageSpec
from ..registry.dirs import PackageDirs
from ..registry.fetcher import Fetcher
from ..registry.mirrors import MirrorRegistry, get_mirror_registry
from ..registry.transport import HttpPackageSource

logger = logging.getLogger(__name__)

class PrepareService:
    """makes packages available in the on-disk cache."""

    def __init__(self, dirs: PackageDirs, mirrors: MirrorRegistry, fetcher: Fetcher):
        self.dirs = dirs
        self.mirrors = mirrors
        self.fetcher = fetcher

    def prepare_package(self, spec: PackageSpec) -> Path:
        """
        return a directory holding the package, downloading it if needed.
        
        locally installed packages in the data directory always win and are
        never re-downloaded. packages from namespaces with a mirror are
        downloaded into the cache directory.
        
        raises:
            PackageNotFoundError: if the package is nowhere to be found
            NetworkFailedError: if the download failed
            MalformedArchiveError: if the downloaded archive was unusable
        """
        persistent = self.dirs.persistent_path(spec)
        if persistent is not None and persistent.exists():
            logger.debug(f"{spec} is installed at {persistent}")
            return persistent

        cached = self.dirs.cache_path(spec)
        if cached is not None:
            if spec.namespace in self.mirrors and not cached.exists():
                self.fetcher.download_package(spec, cached)

            if cached.exists():
                logger.debug(f"{spec} is cached at {cached}")
                return cached

        raise PackageNotFoundError(spec)


def prepare_package(spec: PackageSpec) -> Path:
    """make a package available using the platform directories and the user mirror configuration."""
    mirrors = get_mirror_registry()
    fetcher = Fetcher(HttpPackageSource(), mirrors)
    return PrepareService(PackageDirs.from_platform(), mirrors, fetcher).prepare_package(spec)
