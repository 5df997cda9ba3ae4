import os
import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import List
from dotenv import load_dotenv

load_dotenv()

DEFAULT_MEDIA_URL = "https://api-trestle.corelogic.com/trestle/odata/Media"
REQUIRED_SETTINGS = ("token_url", "client_id", "client_secret", "listings_url", "originating_system")

_LOGGING_READY = False


def _flag(name: str) -> bool:
    return os.environ.get(name, "0").strip() == "1"


@dataclass
class ProxyConfig:
    token_url: str = ""
    client_id: str = ""
    client_secret: str = ""
    listings_url: str = ""
    media_url: str = DEFAULT_MEDIA_URL
    originating_system: str = ""
    port: int = 5000

    # upstream limits
    request_timeout: float = 30
    page_size: int = 50
    media_chunk_size: int = 50
    max_pages: int = 20
    pagination_deadline: float = 120
    allow_full_pagination: bool = False

    cors_origins: str = "*"
    log_dir: str = ""
    enable_scheduler: bool = False
    scheduler_interval_hours: int = 24

    @classmethod
    def from_env(cls) -> "ProxyConfig":
        env = os.environ.get
        return cls(
            token_url=env("TOKEN_URL", ""),
            client_id=env("CLIENT_ID", ""),
            client_secret=env("CLIENT_SECRET", ""),
            listings_url=env("LISTINGS_URL", ""),
            media_url=env("MEDIA_URL", "") or DEFAULT_MEDIA_URL,
            originating_system=env("ORIGINATING_SYSTEM", ""),
            port=int(env("PORT", "5000")),
            request_timeout=float(env("REQUEST_TIMEOUT", "30")),
            page_size=int(env("PAGE_SIZE", "50")),
            media_chunk_size=int(env("MEDIA_CHUNK_SIZE", "50")),
            max_pages=int(env("MAX_PAGES", "20")),
            pagination_deadline=float(env("PAGINATION_DEADLINE", "120")),
            allow_full_pagination=_flag("ALLOW_FULL_PAGINATION"),
            cors_origins=env("CORS_ORIGINS", "*"),
            log_dir=env("LOG_DIR", ""),
            enable_scheduler=_flag("ENABLE_SCHEDULER"),
            scheduler_interval_hours=int(env("SCHEDULER_INTERVAL_HOURS", "24")),
        )

    def missing_settings(self) -> List[str]:
        return [name.upper() for name in REQUIRED_SETTINGS if not getattr(self, name)]


def init_logging(config: ProxyConfig):
    global _LOGGING_READY
    if _LOGGING_READY:
        return
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # stdout handler
    sh = logging.StreamHandler()
    sh.setFormatter(fmt)
    root.addHandler(sh)

    # rotating file
    if config.log_dir:
        os.makedirs(config.log_dir, exist_ok=True)
        fh = RotatingFileHandler(os.path.join(config.log_dir, "proxy.log"), maxBytes=10_000_000, backupCount=5)
        fh.setFormatter(fmt)
        root.addHandler(fh)
    _LOGGING_READY = True


def warn_if_missing_secrets(config: ProxyConfig):
    missing = config.missing_settings()
    if missing:
        logging.warning("Missing %s", ", ".join(missing))
