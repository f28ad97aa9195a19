"""terminal status lines and download progress for pkgcache."""

import sys
from contextlib import contextmanager
from typing import Optional
from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    DownloadColumn,
    TransferSpeedColumn,
    TimeRemainingColumn,
    TaskID,
)


class ProgressManager:
    """owns the status console; progress bars only appear on a terminal."""
    
    def __init__(self, console: Optional[Console] = None):
        # stdout is reserved for command results (paths, versions)
        self.console = console or Console(stderr=True)
        self._enabled = self._should_show_progress()
    
    def _should_show_progress(self) -> bool:
        return sys.stderr.isatty() and not sys.stderr.closed
    
    def print(self, *args, **kwargs):
        """write a status line, e.g. `downloading @preview/cetz:0.2.0`."""
        self.console.print(*args, **kwargs)
    
    @contextmanager
    def spinner(self, description: str, transient: bool = True):
        """
        show a spinner while waiting on a request of unknown size, such as the package index.
        
        yields the spinner's task id, or None when output is not a terminal.
        """
        if not self._enabled:
            yield None
            return
        
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=transient,
        ) as progress:
            yield progress.add_task(description, total=None)
    
    @contextmanager
    def download_progress(self):
        """
        track an archive download: bytes received, transfer speed and time remaining.
        
        the bar is removed once the download finishes. off a terminal a no-op
        stand-in is yielded so callers can report progress unconditionally.
        """
        if not self._enabled:
            yield _DummyProgress()
            return
        
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            yield progress


class _DummyProgress:
    """accepts the Progress calls made during a download and ignores them."""
    
    def add_task(self, description: str, total: Optional[int] = None, **kwargs) -> TaskID:
        return TaskID(0)
    
    def update(self, task_id: TaskID, **kwargs):
        pass
