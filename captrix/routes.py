"""Routes: third-party forwarding services that make a URL fetchable.

A route is a pure function from a target URL to a proxy URL. Routes are tried
in order; which one works is only discovered at fetch time.
"""

from dataclasses import dataclass
from urllib.parse import quote, quote_plus

from captrix.config import Config, RouteConfig

# Characters encodeURIComponent leaves alone besides alphanumerics
_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(url: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(url, safe=_COMPONENT_SAFE)


_ENCODERS = {
    "component": encode_component,
    "plus": lambda url: quote_plus(url, safe=""),
    "raw": lambda url: url,
}


@dataclass(frozen=True)
class Route:
    """A named URL wrapper."""

    name: str
    template: str
    encoding: str = "component"

    def wrap(self, url: str) -> str:
        """Wrap a target URL into the proxy URL for this route."""
        return self.template.replace("{url}", _ENCODERS[self.encoding](url))

    @classmethod
    def from_config(cls, route: RouteConfig) -> "Route":
        return cls(name=route.name, template=route.template, encoding=route.encoding)


def get_routes(config: Config | None = None) -> list[Route]:
    """Routes in preference order (most reliable first).

    Args:
        config: Loaded configuration; None uses the built-in routes.

    Returns:
        Ordered list of routes, possibly empty if configured so.
    """
    config = config or Config()
    return [Route.from_config(r) for r in config.get_routes()]
