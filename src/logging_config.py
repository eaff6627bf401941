"""Loguru setup shared by the API process and the seed scripts."""

import logging
import sys

from loguru import logger

from src.config import settings

log_format = ' | '.join(
    (
        '<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>',
        '<lvl>{level:<8}</>',
        '<c>{name}:{function}:{line}</>',
        '{message}',
    )
)


class InterceptHandler(logging.Handler):
    """Redirect stdlib logging records (uvicorn, sqlalchemy) into loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = None, log_dir: str = None):
    level = level or settings.LOG_LEVEL
    log_dir = log_dir or settings.LOG_DIR

    logger.remove()
    logger.add(sys.stderr, format=log_format, level=level)

    if log_dir:
        logger.add(
            f'{log_dir}/{{time:YYYY-MM-DD}}.log',
            format=log_format,
            level=level,
            rotation='1 day',
            retention='14 days',
            compression='gz',
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ('uvicorn', 'uvicorn.error', 'uvicorn.access'):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
