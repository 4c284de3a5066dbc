"""Unit tests for tracking (logging) utilities."""

import unittest
import sys
import tempfile
from pathlib import Path
import logging

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chord_sampling.config import TrackingConfig
from chord_sampling.tracking import (
    setup_logger, configure_logging, log_phase_start, log_phase_end,
    log_ranking_summary, log_rejection_stats, log_error, log_success
)


class TestLogger(unittest.TestCase):
    """Test logger setup."""

    def test_logger_setup(self):
        """Test logger can be set up."""
        logger = setup_logger(name='test_logger', level=logging.DEBUG)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 1)

    def test_no_duplicate_handlers(self):
        """Test that repeated setup does not stack handlers."""
        setup_logger(name='test_dupes')
        logger = setup_logger(name='test_dupes')
        self.assertEqual(len(logger.handlers), 1)

    def test_file_logging(self):
        """Test that a log file is written."""
        temp_dir = tempfile.mkdtemp()
        log_file = Path(temp_dir) / 'nested' / 'test.log'

        logger = setup_logger(name='test_file', log_file=log_file)
        logger.info("hello chords")
        for handler in logger.handlers:
            handler.flush()

        self.assertTrue(log_file.exists())
        self.assertIn("hello chords", log_file.read_text())
        self.assertEqual(len(logger.handlers), 2)

    def test_configure_from_config(self):
        """Test building the logger from TrackingConfig."""
        temp_dir = tempfile.mkdtemp()
        config = TrackingConfig(log_level='WARNING', log_to_file=True, log_directory=temp_dir)

        logger = configure_logging(config, name='test_configured')

        self.assertEqual(logger.level, logging.WARNING)
        self.assertTrue((Path(temp_dir) / 'test_configured.log').exists())


class TestLogHelpers(unittest.TestCase):
    """Test structured log helpers."""

    def setUp(self):
        """Set up logger."""
        self.logger = setup_logger(name='test_helpers', level=logging.DEBUG)

    def test_phase_logging(self):
        """Test phase start and end messages."""
        with self.assertLogs(self.logger, level='INFO') as captured:
            log_phase_start(self.logger, "Chord ranking", "Context: None")
            log_phase_end(self.logger, "Chord ranking", 1.25)

        output = "\n".join(captured.output)
        self.assertIn("CHORD RANKING", output)
        self.assertIn("CHORD RANKING COMPLETE (1.2s)", output)

    def test_ranking_summary(self):
        """Test ranking summary reports the boundary."""
        with self.assertLogs(self.logger, level='INFO') as captured:
            log_ranking_summary(self.logger, 10, 5, 0.5, 1.58)

        output = "\n".join(captured.output)
        self.assertIn("Ranked 10 chords", output)
        self.assertIn("Boundary index: 5", output)
        self.assertNotIn("Degenerate", output)

    def test_degenerate_ranking_warns(self):
        """Test a boundary at either end is flagged."""
        with self.assertLogs(self.logger, level='WARNING') as captured:
            log_ranking_summary(self.logger, 10, 10, 1.0, 0.0)

        self.assertIn("Degenerate ranking", captured.output[0])

    def test_rejection_stats_at_debug(self):
        """Test rejection stats are debug-level."""
        with self.assertLogs(self.logger, level='DEBUG') as captured:
            log_rejection_stats(self.logger, 3, 0.75)

        self.assertEqual(captured.records[0].levelno, logging.DEBUG)
        self.assertIn("3 draw(s)", captured.output[0])

    def test_error_and_success(self):
        """Test error and success formatting."""
        with self.assertLogs(self.logger, level='INFO') as captured:
            log_error(self.logger, ValueError("bad chord"), context="sampler")
            log_success(self.logger, "done")

        self.assertIn("Error in sampler: ValueError: bad chord", captured.output[0])
        self.assertIn("✓ done", captured.output[1])


if __name__ == '__main__':
    unittest.main(verbosity=2)
