"""Configuration loading for captrix.

All settings are optional. ~/.captrix/config.toml:

    timeout = 20.0
    user_agent = "Mozilla/5.0 ..."

    [[routes]]
    name = "allorigins"
    template = "https://api.allorigins.win/raw?url={url}"
    encoding = "component"

    [[routes]]
    name = "corsproxy"
    template = "https://corsproxy.io/?{url}"

Environment variables (also read from a .env file) override the file:
    CAPTRIX_TIMEOUT: Per-request timeout in seconds
    CAPTRIX_USER_AGENT: User-Agent header sent through every route
    CAPTRIX_ROUTES: Comma-separated route names, selects and orders routes
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from captrix.logging import logger

ROUTE_ENCODINGS = ("component", "plus", "raw")

DEFAULT_TIMEOUT = 20.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class RouteConfig(BaseModel):  # type: ignore[misc]
    """A forwarding service that wraps a target URL.

    Attributes:
        name: Unique route identifier.
        template: Proxy URL with a {url} placeholder for the encoded target.
        encoding: How the target is encoded before substitution:
            "component" (encodeURIComponent), "plus" (form encoding), "raw".
    """

    name: str
    template: str
    encoding: str = "component"

    @field_validator("name")  # type: ignore[untyped-decorator]
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.replace("-", "").replace("_", "").isalnum():
            msg = "Route name must be alphanumeric with dashes/underscores"
            raise ValueError(msg)
        return v

    @field_validator("template")  # type: ignore[untyped-decorator]
    @classmethod
    def validate_template(cls, v: str) -> str:
        if "{url}" not in v:
            msg = "Route template must contain a {url} placeholder"
            raise ValueError(msg)
        return v

    @field_validator("encoding")  # type: ignore[untyped-decorator]
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        if v not in ROUTE_ENCODINGS:
            msg = f"Encoding must be one of: {', '.join(ROUTE_ENCODINGS)}"
            raise ValueError(msg)
        return v


DEFAULT_ROUTES: tuple[RouteConfig, ...] = (
    RouteConfig(name="allorigins", template="https://api.allorigins.win/raw?url={url}"),
    RouteConfig(name="corsproxy", template="https://corsproxy.io/?{url}"),
)


class Config(BaseModel):  # type: ignore[misc]
    """captrix configuration.

    If 'routes' is None the built-in routes are used. An empty list is kept
    as-is: extraction then fails immediately without network access.
    """

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    routes: list[RouteConfig] | None = None

    @field_validator("timeout")  # type: ignore[untyped-decorator]
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            msg = "Timeout must be positive"
            raise ValueError(msg)
        return v

    def get_routes(self) -> list[RouteConfig]:
        """Effective route configs in preference order."""
        if self.routes is None:
            return list(DEFAULT_ROUTES)
        return list(self.routes)

    def get_route_names(self) -> list[str]:
        return [r.name for r in self.get_routes()]

    def select_routes(self, names: list[str]) -> "Config":
        """Return a copy restricted to the named routes, in the given order.

        Raises:
            ValueError: If a name does not match any configured route.
        """
        by_name = {r.name: r for r in self.get_routes()}
        missing = [n for n in names if n not in by_name]
        if missing:
            available = ", ".join(by_name) or "none"
            msg = f"Route(s) not found: {', '.join(missing)}. Available: {available}"
            raise ValueError(msg)
        return self.model_copy(update={"routes": [by_name[n] for n in names]})


def get_config_dir() -> Path:
    """Get or create config directory."""
    config_dir = Path.home() / ".captrix"
    config_dir.mkdir(exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def _apply_env(config: Config) -> Config:
    """Apply CAPTRIX_* environment overrides."""
    updates: dict[str, object] = {}
    if timeout := os.getenv("CAPTRIX_TIMEOUT"):
        updates["timeout"] = float(timeout)
    if user_agent := os.getenv("CAPTRIX_USER_AGENT"):
        updates["user_agent"] = user_agent
    if updates:
        # Re-validate so a bad env value is reported like a bad config file
        config = Config.model_validate({**config.model_dump(), **updates})

    if route_names := os.getenv("CAPTRIX_ROUTES"):
        names = [n.strip() for n in route_names.split(",") if n.strip()]
        config = config.select_routes(names)
    return config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from ~/.captrix/config.toml and the environment.

    A missing file is not an error: defaults are used.
    """
    load_dotenv()
    config_path = path or get_config_path()
    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        config: Config = Config.model_validate(data)
        logger.debug("Loaded config from {}", config_path)
    else:
        config = Config()
        logger.debug("No config at {}, using defaults", config_path)
    return _apply_env(config)
