# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from config.settings import settings

logging.captureWarnings(True)

_INIT_FLAG = "_resume_radar_inited"


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Colour a copy so file handlers sharing the record keep plain levelnames
        colored = logging.makeLogRecord(record.__dict__)
        lvl = colored.levelname
        colored.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        return super().format(colored)


def _level() -> int:
    return getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)


def init_logger() -> logging.Logger:
    """
    Idempotent logger init:
    - Console handler on stdout, coloured levelnames.
    - Size-rotated file under LOG_DIR only when LOG_TO_FILE is set.
    - Level from LOG_LEVEL; noisy client libraries held at WARNING.
    """
    root = logging.getLogger()
    if getattr(root, _INIT_FLAG, False):
        return logging.getLogger(settings.LOGGER_NAME)

    level = _level()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    text_fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    date_fmt = "%Y-%m-%dT%H:%M:%S%z"

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(ColoredFormatter(text_fmt, datefmt=date_fmt))
    root.addHandler(console)

    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter(text_fmt, datefmt=date_fmt))
        root.addHandler(fh)

    for noisy in ("httpx", "httpcore", "sentence_transformers"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)

    setattr(root, _INIT_FLAG, True)
    logger = logging.getLogger(settings.LOGGER_NAME)
    logger.debug("logger.initialized level=%s", logging.getLevelName(level))
    return logger
