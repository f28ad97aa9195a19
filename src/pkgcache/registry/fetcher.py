"""downloads the package index and package archives."""

import io
import logging
import shutil
import tarfile
import tempfile
import zlib
from pathlib import Path
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import index_url
from ..domain.errors import (
    MalformedArchiveError,
    NetworkFailedError,
    PackageNotFoundError,
    VersionError,
)
from ..domain.models import PackageInfo, PackageSpec
from ..ui.progress import ProgressManager
from .client import PackageSource
from .mirrors import MirrorRegistry

logger = logging.getLogger(__name__)

_index_adapter = TypeAdapter(List[PackageInfo])


def _is_not_found(error: Exception) -> bool:
    return isinstance(error, httpx.HTTPStatusError) and error.response.status_code == 404


class Fetcher:
    def __init__(
        self,
        source: PackageSource,
        mirrors: MirrorRegistry,
        progress_manager: Optional[ProgressManager] = None,
    ):
        self.source = source
        self.mirrors = mirrors
        self.progress_manager = progress_manager or ProgressManager()

    def download_index(self) -> List[PackageInfo]:
        """
        download the index of the default namespace.
        
        raises:
            VersionError: if the index is missing, unreachable or malformed
        """
        url = index_url()
        logger.debug(f"fetching package index from {url}")
        try:
            with self.progress_manager.spinner("fetching package index"):
                data = self.source.download(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            if _is_not_found(e):
                raise VersionError("failed to fetch package index (not found)") from e
            raise VersionError(f"failed to fetch package index ({e})") from e

        try:
            return _index_adapter.validate_json(data)
        except ValidationError as e:
            raise VersionError(f"failed to parse package index: {e}") from e

    def download_package(self, spec: PackageSpec, package_dir: Path) -> None:
        """
        download a package archive from its namespace mirror and unpack it into package_dir.
        
        package_dir must not exist yet; it is created by the unpack and never left
        behind half-populated.
        
        raises:
            PackageNotFoundError: if the mirror answers 404
            NetworkFailedError: on any other transport or http failure
            MalformedArchiveError: if the archive cannot be decompressed or unpacked
        """
        assert spec.namespace in self.mirrors, f"no mirror for namespace '{spec.namespace}'"

        url = self.mirrors.url_for(spec.namespace, spec.name, str(spec.version))
        logger.debug(f"downloading {spec} from {url}")
        self._print_downloading(spec)

        try:
            data = self.source.download_with_progress(url, f"downloading {spec}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            if _is_not_found(e):
                raise PackageNotFoundError(spec) from e
            raise NetworkFailedError(str(e)) from e

        unpack_archive(data, package_dir)

    def _print_downloading(self, spec: PackageSpec) -> None:
        # advisory only; a broken terminal must not fail the download
        try:
            self.progress_manager.print(f"[bold cyan]downloading[/bold cyan] {spec}")
        except OSError:
            pass


def unpack_archive(data: bytes, package_dir: Path) -> None:
    """
    unpack gzip-compressed tar bytes into package_dir.
    
    the archive is extracted into a sibling staging directory which is then
    renamed onto package_dir, so package_dir only ever appears complete.
    """
    try:
        package_dir.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{package_dir.name}-", dir=package_dir.parent))
    except OSError as e:
        # the cache directory itself is not writable
        raise MalformedArchiveError(str(e)) from e

    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
            archive.extractall(staging, filter="data")
    except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
        shutil.rmtree(staging, ignore_errors=True)
        raise MalformedArchiveError(str(e)) from e

    try:
        # mkdtemp creates the directory private to the user
        staging.chmod(0o755)
        staging.rename(package_dir)
    except OSError as e:
        shutil.rmtree(staging, ignore_errors=True)
        if not package_dir.exists():
            raise MalformedArchiveError(str(e)) from e
        # another process unpacked the same package first
        logger.debug(f"{package_dir} was populated concurrently, keeping it")
