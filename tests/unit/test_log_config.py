"""Tests for logging setup."""

import logging

from rich.logging import RichHandler

from spm_outdated.log_config import level_for_verbosity, setup_logging


def test_level_for_verbosity():
    """Each -v lowers the logging threshold."""
    assert level_for_verbosity(0) == logging.ERROR
    assert level_for_verbosity(1) == logging.INFO
    assert level_for_verbosity(2) == logging.DEBUG
    assert level_for_verbosity(5) == logging.DEBUG


class TestSetupLogging:
    """Test root logger configuration."""

    def setup_method(self):
        """Remember the root logger state."""
        root = logging.getLogger()
        self.handlers = root.handlers[:]
        self.level = root.level

    def teardown_method(self):
        """Restore the root logger state."""
        root = logging.getLogger()
        root.handlers[:] = self.handlers
        root.setLevel(self.level)

    def test_setup_logging_installs_rich_handler(self):
        """Should replace root handlers with a single rich handler on stderr."""
        setup_logging(1)

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)
        assert root.handlers[0].console.stderr

    def test_setup_logging_default_is_quiet(self):
        """Without -v only errors pass."""
        setup_logging()
        assert logging.getLogger().level == logging.ERROR
