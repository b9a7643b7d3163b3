"""
Tests for logging setup and per-timeframe execution helpers.
"""

import logging

import pytest

from chest_volume.data_models import MarkerRecord
from chest_volume.exceptions import MalformedInputError
from chest_volume.utils.logging_config import setup_logging
from chest_volume.utils.timeframes import group_by_timeframe, map_timeframes


@pytest.fixture
def package_logger():
    """Restore the package logger after a test reconfigures it."""
    logger = logging.getLogger("chest_volume")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


class TestLoggingSetup:

    def test_console_handler(self, package_logger):
        logger = setup_logging(logging.DEBUG)

        assert logger is package_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup_does_not_duplicate(self, package_logger):
        setup_logging()
        setup_logging()

        assert len(package_logger.handlers) == 1

    def test_file_handler(self, package_logger, tmp_path):
        log_file = tmp_path / "run.log"

        setup_logging("info", log_file=str(log_file))
        logging.getLogger("chest_volume.pipeline").info("hello from the pipeline")
        for handler in package_logger.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "hello from the pipeline" in text

    def test_unknown_level(self, package_logger):
        with pytest.raises(ValueError, match="Unknown logging level"):
            setup_logging("LOUD")


class TestTimeframes:

    @pytest.fixture
    def records(self):
        return [
            MarkerRecord(3, "A", 0.0, 0.0, 0.0),
            MarkerRecord(1, "B", 0.0, 0.0, 0.0),
            MarkerRecord(1, "A", 0.0, 0.0, 0.0),
            MarkerRecord(2, "A", 0.0, 0.0, 0.0),
        ]

    def test_group_by_timeframe(self, records):
        groups = group_by_timeframe(records)

        assert list(groups) == [1, 2, 3]
        assert [r.marker_id for r in groups[1]] == ["B", "A"]

    def test_duplicate_marker(self, records):
        with pytest.raises(MalformedInputError, match="timeframe 2"):
            group_by_timeframe(records + [MarkerRecord(2, "A", 1.0, 1.0, 1.0)])

    @pytest.mark.parametrize("max_workers", [1, 2, 8])
    def test_map_timeframes_order(self, records, max_workers):
        groups = group_by_timeframe(records)

        results = map_timeframes(lambda tf, group: (tf, len(group)), groups, max_workers)

        assert results == [(1, 2), (2, 1), (3, 1)]

    def test_map_timeframes_propagates_errors(self, records):
        def fail(tf, group):
            raise RuntimeError(f"bad timeframe {tf}")

        with pytest.raises(RuntimeError, match="bad timeframe"):
            map_timeframes(fail, group_by_timeframe(records), max_workers=2)

    def test_invalid_worker_count(self, records):
        with pytest.raises(ValueError):
            map_timeframes(lambda tf, group: tf, group_by_timeframe(records), max_workers=0)


def test_pipeline_configures_logging(config_manager, package_logger, tmp_path):
    from chest_volume.pipeline import ChestVolumePipeline

    log_file = tmp_path / "pipeline.log"
    config_manager.set('logging.level', 'DEBUG')
    config_manager.set('logging.log_file', str(log_file))

    ChestVolumePipeline(config_manager, configure_logging=True)

    assert package_logger.level == logging.DEBUG
    assert log_file.exists()
