"""test suite for progress manager."""
import pytest
import sys
from unittest.mock import Mock, patch

from rich.console import Console

from pkgcache.ui.progress import ProgressManager, _DummyProgress


class TestProgressManager:
    """test progress manager functionality."""
    
    def test_initialization_default(self):
        """test progress manager writes to stderr by default."""
        pm = ProgressManager()
        assert pm.console is not None
        assert pm.console.stderr is True
    
    def test_initialization_custom_console(self):
        """test progress manager accepts custom console."""
        custom_console = Console()
        pm = ProgressManager(console=custom_console)
        assert pm.console is custom_console
    
    def test_tty_detection_interactive(self):
        """test progress is enabled in interactive terminal."""
        with patch.object(sys.stderr, 'isatty', return_value=True):
            pm = ProgressManager()
            assert pm._enabled is True
    
    def test_tty_detection_non_interactive(self):
        """test progress is disabled in non-interactive environment."""
        with patch.object(sys.stderr, 'isatty', return_value=False):
            pm = ProgressManager()
            assert pm._enabled is False
    
    def test_print_method(self):
        """test print method delegates to console."""
        mock_console = Mock(spec=Console)
        pm = ProgressManager(console=mock_console)
        
        pm.print("test message", style="bold")
        mock_console.print.assert_called_once_with("test message", style="bold")
    
    def test_spinner_context_interactive(self):
        """test spinner context in interactive mode."""
        with patch.object(sys.stderr, 'isatty', return_value=True):
            pm = ProgressManager()
            
            with pm.spinner("fetching package index") as task_id:
                assert task_id is not None
    
    def test_spinner_context_non_interactive(self):
        """test spinner context in non-interactive mode stays silent."""
        with patch.object(sys.stderr, 'isatty', return_value=False):
            mock_console = Mock(spec=Console)
            pm = ProgressManager(console=mock_console)
            
            with pm.spinner("fetching package index") as task_id:
                assert task_id is None
            
            mock_console.print.assert_not_called()
    
    def test_download_progress_context_interactive(self):
        """test download progress context in interactive mode."""
        with patch.object(sys.stderr, 'isatty', return_value=True):
            pm = ProgressManager()
            
            with pm.download_progress() as progress:
                assert progress is not None
                task_id = progress.add_task("downloading", total=100)
                progress.update(task_id, completed=50)
    
    def test_download_progress_context_non_interactive(self):
        """test download progress context in non-interactive mode."""
        with patch.object(sys.stderr, 'isatty', return_value=False):
            pm = ProgressManager()
            
            with pm.download_progress() as progress:
                assert isinstance(progress, _DummyProgress)
    
    def test_progress_with_exceptions(self):
        """test progress contexts let exceptions through."""
        with patch.object(sys.stderr, 'isatty', return_value=True):
            pm = ProgressManager()
            
            with pytest.raises(ValueError):
                with pm.download_progress() as progress:
                    progress.add_task("failing download", total=10)
                    raise ValueError("test error")


class TestDummyProgress:
    """test dummy progress fallback."""
    
    def test_add_task(self):
        dp = _DummyProgress()
        task_id = dp.add_task("test", total=10)
        assert task_id is not None
    
    def test_update(self):
        dp = _DummyProgress()
        task_id = dp.add_task("test", total=10)
        # should not raise
        dp.update(task_id, completed=5)
    

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
