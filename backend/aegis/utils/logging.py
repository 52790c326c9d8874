import logging


def create_logger(level: int) -> logging.Logger:
    formatter = logging.Formatter(
        fmt="[%(asctime)s] [%(name)s] [%(process)d] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S %z",
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    new_logger = logging.getLogger("aegis")
    new_logger.setLevel(level)
    new_logger.addHandler(stream_handler)
    new_logger.propagate = False
    return new_logger


logger = create_logger(logging.INFO)
