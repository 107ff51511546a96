import os
import tomllib
import logging
from pathlib import Path
from typing import Optional, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT = 10.0
ENV_BASE_URL = "TINYLINK_API_URL"
CONFIG_PATH = Path("~/.tinylink.toml").expanduser()


# ========== Config ==========
@dataclass
class Config:
    url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    verify_tls: bool = True
    debug: bool = False

    @classmethod
    def init_from_args(cls, args, env: Optional[Mapping[str, str]] = None,
                       config_path: Optional[Path] = None) -> "Config":
        """Build a Config from parsed CLI options.

        The base url comes from ``--url``, then the environment, then the
        ``url`` key of the config file, then the default.
        """
        env = os.environ if env is None else env
        url = (getattr(args, "url", None)
               or env.get(ENV_BASE_URL)
               or load_file_url(config_path or CONFIG_PATH)
               or DEFAULT_BASE_URL)
        timeout = getattr(args, "timeout", None)
        return cls(
            url=url.rstrip("/"),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            verify_tls=not getattr(args, "insecure", False),
            debug=bool(getattr(args, "debug", False)),
        )


def load_file_url(path: Path) -> Optional[str]:
    try:
        with open(path, "rb") as fp:
            data = tomllib.load(fp)
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return None
    url = data.get("url")
    return url if isinstance(url, str) and url else None
