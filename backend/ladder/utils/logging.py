import logging

from ladder.config import environment


def create_logger(level: int) -> logging.Logger:
    logger = logging.getLogger("ladder")
    logger.setLevel(level)

    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logger.addHandler(stream_handler)

    return logger


logger = create_logger(environment.get_log_level())
