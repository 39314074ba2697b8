import logging

from goalcast.config import LOG_LEVEL
from goalcast.utils.logging_utils import PACKAGE_LOGGER, get_logger


def test_get_logger_defaults_to_package_logger():
    assert get_logger().name == PACKAGE_LOGGER
    assert get_logger("goalcast.models.predictor").name == "goalcast.models.predictor"


def test_module_loggers_propagate_to_root():
    logger = get_logger("goalcast.models.predictor")
    assert logger.propagate
    assert logging.getLogger().handlers


def test_configured_level_is_a_logging_level():
    assert isinstance(logging.getLevelName(LOG_LEVEL), int)
