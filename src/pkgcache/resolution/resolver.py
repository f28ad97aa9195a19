import logging
from typing import List

from ..config import DEFAULT_NAMESPACE
from ..domain.errors import VersionError
from ..domain.models import PackageVersion, VersionlessPackageSpec
from ..registry.dirs import PackageDirs
from ..registry.fetcher import Fetcher
from ..registry.mirrors import get_mirror_registry
from ..registry.transport import HttpPackageSource

logger = logging.getLogger(__name__)

class VersionResolver:
    def __init__(self, fetcher: Fetcher, dirs: PackageDirs):
        self.fetcher = fetcher
        self.dirs = dirs

    def determine_latest_version(self, spec: VersionlessPackageSpec) -> PackageVersion:
        """
        find the latest version of a package.
        
        the default namespace is looked up in the remote index. every other
        namespace is only searched locally in the data directory; the cache
        directory is not meant for hand-installed packages.
        
        raises:
            VersionError: if no version can be determined
        """
        if spec.namespace == DEFAULT_NAMESPACE:
            versions = [
                package.version
                for package in self.fetcher.download_index()
                if package.name == spec.name
            ]
            if not versions:
                raise VersionError(f"failed to find package {spec}")
            return max(versions)

        versions = self._local_versions(spec)
        if not versions:
            raise VersionError("please specify the desired version")
        return max(versions)

    def _local_versions(self, spec: VersionlessPackageSpec) -> List[PackageVersion]:
        package_dir = self.dirs.local_versions_dir(spec)
        if package_dir is None or not package_dir.is_dir():
            return []

        versions = []
        for entry in package_dir.iterdir():
            if not entry.is_dir():
                continue
            try:
                versions.append(PackageVersion.parse(entry.name))
            except ValueError:
                logger.debug(f"ignoring {entry}: not a version directory")
        return versions


def determine_latest_version(spec: VersionlessPackageSpec) -> PackageVersion:
    """find the latest version using the platform directories and the user mirror configuration."""
    fetcher = Fetcher(HttpPackageSource(), get_mirror_registry())
    return VersionResolver(fetcher, PackageDirs.from_platform()).determine_latest_version(spec)
