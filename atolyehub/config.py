"""Environment configuration loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILE = ".env"


def load_config() -> bool:
    """Load variables from ``.env`` in the working directory.

    Returns True when the file was found and loaded. A missing file only
    produces a warning; the process environment is then used as is.
    """
    path = Path.cwd() / ENV_FILE
    if not path.is_file():
        logger.warning(
            "Uyarı: .env dosyası bulunamadı, environment değişkenleri kullanılacak."
        )
        return False
    load_dotenv(path, override=False)
    return True


def get_env(key: str, fallback: str) -> str:
    """Return the environment variable ``key``, or ``fallback`` when unset.

    A variable that is set to an empty string counts as set.
    """
    return os.environ.get(key, fallback)