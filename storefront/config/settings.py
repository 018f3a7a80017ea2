# storefront/config/settings.py

"""Central configuration for the storefront catalog."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront catalog."""

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_PATH: Path = Path(
        os.getenv(
            "STOREFRONT_DATA_PATH",
            str(BASE_DIR / "storefront" / "data" / "products.json"),
        )
    )
    LOGS_DIR: Path = Path(
        os.getenv("STOREFRONT_LOGS_DIR", str(BASE_DIR / "logs"))
    )

    # --- Logging ---
    LOG_FILE_LEVEL: str = "DEBUG"
    LOG_CONSOLE_LEVEL: str = os.getenv("STOREFRONT_LOG_LEVEL", "WARNING")
    LOG_KEEP_RUNS: int = 20             # Older run_*.log files are pruned

    # --- Sharing ---
    BASE_URL: str = os.getenv(
        "STOREFRONT_BASE_URL", "http://localhost:5000/"
    )
    SHARE_QUERY_PARAM: str = "product"
    TOAST_DURATION: float = 3.0         # Seconds the "Link copied" toast stays

    # --- Ratings ---
    MIN_RATING: int = 1
    MAX_RATING: int = 5
    MIN_RATING_CHOICES: list[int] = [0, 1, 2, 3, 4, 5]

    # --- Comments ---
    COMMENT_MAX_LENGTH: int = 500

    # --- URL validation ---
    URL_CHECK_TIMEOUT: int = 10         # Seconds before a HEAD request gives up
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
    }
