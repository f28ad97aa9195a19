import io
from typing import Optional

import httpx

from .. import __version__
from ..ui.progress import ProgressManager
from .client import PackageSource


class HttpPackageSource(PackageSource):
    """
    fetches bytes over http(s) with httpx.
    
    non-2xx responses raise httpx.HTTPStatusError and connection problems raise
    httpx.TransportError; callers decide what they mean.
    """

    def __init__(
        self,
        progress_manager: Optional[ProgressManager] = None,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        self.progress_manager = progress_manager or ProgressManager()
        self.client = client or httpx.Client(
            follow_redirects=True,
            timeout=timeout,
            headers={"User-Agent": f"pkgcache/{__version__}"},
        )

    def download(self, url: str) -> bytes:
        response = self.client.get(url)
        response.raise_for_status()
        return response.content

    def download_with_progress(self, url: str, description: str) -> bytes:
        buffer = io.BytesIO()
        with self.progress_manager.download_progress() as progress:
            task_id = progress.add_task(description, total=None)
            with self.client.stream("GET", url) as response:
                response.raise_for_status()
                
                # get total size if available
                if "content-length" in response.headers:
                    progress.update(task_id, total=int(response.headers["content-length"]))
                
                downloaded = 0
                for chunk in response.iter_bytes():
                    buffer.write(chunk)
                    downloaded += len(chunk)
                    progress.update(task_id, completed=downloaded)
        return buffer.getvalue()

    def close(self):
        self.client.close()
