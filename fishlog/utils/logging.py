import logging, os
from datetime import datetime

from fishlog.config.settings import config_dir

logger = logging.getLogger("fishlog")

def init() -> None:
    if logger.handlers:
        return
    logger.setLevel(logging.DEBUG)

    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(ch)

    log_dir = os.path.join(config_dir(), "logs")
    os.makedirs(log_dir, exist_ok=True)
    fh = logging.FileHandler(os.path.join(log_dir, f"fishlog_{datetime.now():%Y%m%d}.log"))
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    logger.addHandler(fh)

    logger.info("FishLog logging initialized")
