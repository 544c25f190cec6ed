# test_logging_config.py
# Test cases for loguru sink configuration
#
from loguru import logger

from digital_rain.Utils.logging_config import configure_logging, is_valid_log_level


def test_file_sink_receives_records(isolated_temp_dir):
    log_path = isolated_temp_dir / "rain.log"
    configure_logging(level="DEBUG", log_file=str(log_path))
    logger.info("raindrop recycled")
    logger.remove()

    content = log_path.read_text()
    assert "raindrop recycled" in content
    assert "INFO" in content


def test_level_filters_records(isolated_temp_dir):
    log_path = isolated_temp_dir / "rain.log"
    configure_logging(level="warning", log_file=str(log_path))
    logger.info("quiet")
    logger.warning("loud")
    logger.remove()

    content = log_path.read_text()
    assert "quiet" not in content
    assert "loud" in content



def test_unknown_level_uses_info(isolated_temp_dir):
    log_path = isolated_temp_dir / "rain.log"
    configure_logging(level="chatty", log_file=str(log_path))
    logger.debug("hidden")
    logger.info("shown")
    logger.remove()

    content = log_path.read_text()
    assert "Unknown log level 'CHATTY', using INFO" in content
    assert "hidden" not in content
    assert "shown" in content


def test_is_valid_log_level():
    assert is_valid_log_level("TRACE")
    assert is_valid_log_level("WARNING")
    assert not is_valid_log_level("CHATTY")
