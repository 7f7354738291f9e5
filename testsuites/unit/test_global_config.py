from loguru import logger

from pagewatch.common import get_logger, init_logger, reset_logger


def test_init_logger_writes_to_the_requested_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"

    reset_logger()
    try:
        init_logger(level="debug", log_file=str(log_file))
        get_logger().info("page opened")
        # removing the sinks closes (and flushes) the file
        logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "page opened" in content
        assert "INFO" in content
    finally:
        reset_logger()
        init_logger()


def test_init_logger_only_configures_once(tmp_path):
    first = tmp_path / "first.log"
    second = tmp_path / "second.log"

    reset_logger()
    try:
        init_logger(log_file=str(first))
        init_logger(log_file=str(second))
        logger.remove()

        assert first.exists()
        assert not second.exists()
    finally:
        reset_logger()
        init_logger()
