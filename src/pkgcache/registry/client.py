from abc import ABC, abstractmethod

class PackageSource(ABC):
    @abstractmethod
    def download(self, url: str) -> bytes:
        """Fetch the body at url."""
        pass

    @abstractmethod
    def download_with_progress(self, url: str, description: str) -> bytes:
        """Fetch the body at url, reporting transfer progress under description."""
        pass
