# Simple rotating logger to file and console.
import logging, os
from logging.handlers import RotatingFileHandler

def get_logger(name: str, filename: str = "server.log"):
    log_dir = os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log = logging.getLogger(name)
    if log.handlers:
        return log
    log.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    fh = RotatingFileHandler(os.path.join(log_dir, filename), maxBytes=512000, backupCount=2, encoding="utf-8")
    ch = logging.StreamHandler()
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s")
    fh.setFormatter(fmt)
    ch.setFormatter(fmt)
    log.addHandler(fh)
    log.addHandler(ch)
    return log
