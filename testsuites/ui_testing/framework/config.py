"""
================================================================================
Test Configuration
================================================================================

Layered configuration for the public-site E2E suite.

Resolution order (highest to lowest priority):
    1. Properties  - pytest command-line options (--site-url, --remote-url, ...)
    2. Environment - BASE_URL, BROWSER_REMOTE_URL, DEFAULT_TIMEOUT, HEADLESS, ...
    3. YAML file   - config/config.yaml (or the path in E2E_CONFIG)
    4. Built-in defaults

Empty strings are treated as "not set" at every layer.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

DEFAULT_BASE_URL = "https://getquickresume.com"
DEFAULT_REMOTE_URL = ""
DEFAULT_TIMEOUT = 10
DEFAULT_PAGE_LOAD_TIMEOUT = 30
DEFAULT_BROWSER = "chromium"
DEFAULT_WINDOW_SIZE = (1920, 1080)
DEFAULT_REPORT_DIR = "reports"

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


@dataclass(frozen=True)
class SettingSource:
    """Where a single setting can come from, per layer."""
    option: str
    env: str
    yaml_key: str


# setting name -> (pytest option dest, environment variable, YAML dot path)
SETTING_SOURCES: Dict[str, SettingSource] = {
    "base_url": SettingSource("site_url", "BASE_URL", "site.base_url"),
    "remote_url": SettingSource("remote_url", "BROWSER_REMOTE_URL", "browser.remote_url"),
    "default_timeout": SettingSource("default_timeout", "DEFAULT_TIMEOUT", "browser.default_timeout"),
    "headless": SettingSource("headless", "HEADLESS", "browser.headless"),
    "browser": SettingSource("browser_name", "BROWSER", "browser.name"),
    "page_load_timeout": SettingSource("page_load_timeout", "PAGE_LOAD_TIMEOUT", "browser.page_load_timeout"),
    "report_dir": SettingSource("report_dir", "REPORT_DIR", "report.dir"),
}


class ConfigLoader:
    """
    YAML configuration file with dot-notation access.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("site.base_url", "https://getquickresume.com")
        'https://getquickresume.com'
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        env_path = os.environ.get("E2E_CONFIG")
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.debug(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    @property
    def path(self) -> Path:
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a YAML value by dot-notation path."""
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        return self._config.get(section, {}) or {}

    def reload(self) -> None:
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")


# ================================================================================
# Settings
# ================================================================================

@dataclass(frozen=True)
class Settings:
    """
    Immutable run settings shared by every test in a session.

    Attributes:
        base_url: Site under test, without trailing slash
        remote_url: Remote browser endpoint; empty means launch locally
        default_timeout: Ceiling for explicit waits, in seconds
        headless: Launch the local browser without a window
        browser: Playwright browser type name
        page_load_timeout: Navigation ceiling, in seconds
        window_size: Viewport width and height for new sessions
        report_dir: Root directory for HTML reports and screenshots
    """
    base_url: str = DEFAULT_BASE_URL
    remote_url: str = DEFAULT_REMOTE_URL
    default_timeout: int = DEFAULT_TIMEOUT
    headless: bool = True
    browser: str = DEFAULT_BROWSER
    page_load_timeout: int = DEFAULT_PAGE_LOAD_TIMEOUT
    window_size: Tuple[int, int] = DEFAULT_WINDOW_SIZE
    report_dir: str = DEFAULT_REPORT_DIR

    @property
    def is_remote(self) -> bool:
        return bool(self.remote_url)

    @property
    def environment_label(self) -> str:
        return "Remote" if self.is_remote else "Local"

    @property
    def default_timeout_ms(self) -> int:
        return self.default_timeout * 1000

    @property
    def page_load_timeout_ms(self) -> int:
        return self.page_load_timeout * 1000

    def url_for(self, path: str) -> str:
        """Join a site-relative path onto the base URL."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"


def _is_set(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and value.strip() == "")


def parse_bool(value: Any) -> bool:
    """Parse a boolean setting from str/bool/int."""
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Not a boolean value: {value!r}")


def _parse_positive_int(value: Any) -> int:
    parsed = int(str(value).strip())
    if parsed <= 0:
        raise ValueError(f"Expected a positive integer, got {parsed}")
    return parsed


def _parse_browser(value: Any) -> str:
    name = str(value).strip().lower()
    if name not in SUPPORTED_BROWSERS:
        raise ValueError(f"Unsupported browser: {value!r}")
    return name


def resolve(
    name: str,
    default: Any,
    options: Mapping[str, Any],
    environ: Mapping[str, str],
    config: ConfigLoader,
    parser: Callable[[Any], Any] = str,
) -> Any:
    """
    Resolve one setting through property -> environment -> YAML -> default.

    A value that fails to parse is logged and the built-in default is used,
    matching how an invalid timeout never aborts a run.
    """
    source = SETTING_SOURCES[name]
    candidates = (
        ("property", options.get(source.option)),
        ("environment", environ.get(source.env)),
        ("config file", config.get(source.yaml_key)),
    )
    for layer, raw in candidates:
        if not _is_set(raw):
            continue
        try:
            return parser(raw)
        except (TypeError, ValueError):
            logger.warning(
                f"Invalid value for {name} from {layer}: {raw!r}. Using default {default!r}"
            )
            return default
    return default


def load_settings(
    options: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> Settings:
    """
    Build Settings from all configuration layers.

    Args:
        options: Property layer, usually `vars(pytest_config.option)`
        environ: Environment layer, defaults to `os.environ`
        config_path: YAML file path override

    Returns:
        Settings
    """
    options = options or {}
    environ = os.environ if environ is None else environ
    config = ConfigLoader(config_path)

    window = config.get("browser.window_size") or {}
    window_size = (
        int(window.get("width", DEFAULT_WINDOW_SIZE[0])),
        int(window.get("height", DEFAULT_WINDOW_SIZE[1])),
    )

    settings = Settings(
        base_url=resolve("base_url", DEFAULT_BASE_URL, options, environ, config).strip().rstrip("/"),
        remote_url=resolve("remote_url", DEFAULT_REMOTE_URL, options, environ, config).strip(),
        default_timeout=resolve(
            "default_timeout", DEFAULT_TIMEOUT, options, environ, config, _parse_positive_int
        ),
        headless=resolve("headless", True, options, environ, config, parse_bool),
        browser=resolve("browser", DEFAULT_BROWSER, options, environ, config, _parse_browser),
        page_load_timeout=resolve(
            "page_load_timeout", DEFAULT_PAGE_LOAD_TIMEOUT, options, environ, config, _parse_positive_int
        ),
        window_size=window_size,
        report_dir=resolve("report_dir", DEFAULT_REPORT_DIR, options, environ, config),
    )
    logger.debug(f"Resolved settings: {settings}")
    return settings


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "Settings",
    "load_settings",
    "parse_bool",
    "SETTING_SOURCES",
]
