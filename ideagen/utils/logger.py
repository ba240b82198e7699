import logging
import sys
from ideagen.utils.config import config

# Provider SDK and transport loggers, held at HTTP_LOG_LEVEL so request lines
# and retry chatter stay out of the idea tables
QUIET_LOGGERS = ("httpx", "httpcore", "openai")

# Everything outside ideagen only surfaces errors
logging.basicConfig(level=logging.ERROR, format=config.log_format, stream=sys.stdout)

ideagen_logger = logging.getLogger('ideagen')

ideagen_handler = logging.StreamHandler(sys.stdout)
ideagen_handler.setFormatter(logging.Formatter(config.log_format))

# Re-importing after a reload must not stack handlers
for handler in list(ideagen_logger.handlers):
    ideagen_logger.removeHandler(handler)
ideagen_logger.addHandler(ideagen_handler)
ideagen_logger.propagate = False


def set_log_level(level: str) -> None:
    """
    Switch the ideagen logger to a new level.

    The provider loggers follow it downwards only as far as HTTP_LOG_LEVEL
    allows, so --verbose shows adapter traffic without raw HTTP noise.
    """
    ideagen_logger.setLevel(level.upper())
    quiet_level = max(logging.getLevelName(config.http_log_level), ideagen_logger.level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


set_log_level(config.log_level)

logger = logging.getLogger(__name__)
