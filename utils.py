import logging


def setup_logger(name="NetworkSim", level=logging.INFO):
    """
    Returns a named logger writing to stderr.
    Handlers are attached once, so repeated calls from different modules are safe.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s", "%H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)
    return logger
