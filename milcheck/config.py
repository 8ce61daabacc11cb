"""
milcheck settings: defaults and environment overrides.

Overview
- Settings: frozen runtime settings (mirrorlist path, status and news URLs,
  request timeout, color and debug switches).
- load_settings(environ): Settings from MILCHECK_* variables and COLORTERM,
  falling back to the module defaults. Raises ValueError on a bad timeout.
"""
import os
from collections.abc import Mapping
from dataclasses import dataclass

PACMAN_MIRRORLIST = "/etc/pacman.d/mirrorlist"
ARCH_URL = "https://archlinux.org"
MIRROR_STATUS_URL = ARCH_URL + "/mirrors/status/"
MIRROR_STATUS_JSON_URL = ARCH_URL + "/mirrors/status/json/"
DEFAULT_TIMEOUT = 30.0
DEFAULT_NEWS_COUNT = 3

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    mirrorlist: str = PACMAN_MIRRORLIST
    status_url: str = MIRROR_STATUS_URL
    status_json_url: str = MIRROR_STATUS_JSON_URL
    news_url: str = ARCH_URL
    timeout: float = DEFAULT_TIMEOUT
    truecolor: bool = False
    debug: bool = False


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ

    timeout = env.get("MILCHECK_TIMEOUT")
    try:
        timeout = float(timeout) if timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ValueError(f"MILCHECK_TIMEOUT must be a number of seconds, got {timeout!r}") from None
    if timeout <= 0:
        raise ValueError(f"MILCHECK_TIMEOUT must be positive, got {timeout!r}")

    return Settings(
        mirrorlist=env.get("MILCHECK_MIRRORLIST") or PACMAN_MIRRORLIST,
        status_url=env.get("MILCHECK_STATUS_URL") or MIRROR_STATUS_URL,
        status_json_url=env.get("MILCHECK_STATUS_JSON_URL") or MIRROR_STATUS_JSON_URL,
        news_url=(env.get("MILCHECK_NEWS_URL") or ARCH_URL).rstrip("/"),
        timeout=timeout,
        truecolor=env.get("COLORTERM") == "truecolor",
        debug=env.get("MILCHECK_DEBUG", "").strip().lower() in TRUTHY,
    )


__all__ = (
    "Settings",
    "load_settings",
    "PACMAN_MIRRORLIST",
    "ARCH_URL",
    "MIRROR_STATUS_URL",
    "MIRROR_STATUS_JSON_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_NEWS_COUNT",
)
