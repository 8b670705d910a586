#rotasmart/src/common/logging_config.py

import sys
from loguru import logger

from common.settings import LOG_LEVEL, LOG_FILE


def setup_logging(level: str | None = None, log_file: str | None = None):
    """
    Reconfigura os sinks do loguru.
    - stderr sempre ativo
    - arquivo com rotação diária quando LOG_FILE estiver definido
    """
    nivel = (level or LOG_LEVEL).upper()
    arquivo = log_file or LOG_FILE

    logger.remove()
    logger.add(
        sys.stderr,
        level=nivel,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )

    if arquivo:
        logger.add(
            arquivo,
            level=nivel,
            rotation="1 day",
            retention="7 days",
            encoding="utf-8",
        )

    logger.debug(f"📝 Logging configurado | nível={nivel} | arquivo={arquivo or '-'}")
    return logger
