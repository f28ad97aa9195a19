from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import PackageSpec

class PkgcacheError(Exception):
    """base class for exceptions in pkgcache."""
    pass

class PackageError(PkgcacheError):
    """raised when a package cannot be made available locally."""
    pass

class PackageNotFoundError(PackageError):
    """raised when a package/version does not exist at any known location or mirror."""
    def __init__(self, spec: "PackageSpec"):
        self.spec = spec
        super().__init__(f"package not found (searched for {spec})")

class NetworkFailedError(PackageError):
    """raised on transport failures other than a clean 404."""
    def __init__(self, message: Optional[str] = None):
        self.message = message
        if message:
            super().__init__(f"failed to download package ({message})")
        else:
            super().__init__("failed to download package")

class MalformedArchiveError(PackageError):
    """raised when a downloaded archive cannot be decompressed or unpacked."""
    def __init__(self, message: Optional[str] = None):
        self.message = message
        if message:
            super().__init__(f"failed to decompress package ({message})")
        else:
            super().__init__("failed to decompress package")

class VersionError(PkgcacheError):
    """raised when the latest version of a package cannot be determined."""
    pass
