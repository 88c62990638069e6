"""Console configuration.

NavigationConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class NavigationConfig:
    """Navigation and route-table configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = NavigationConfig(landing_path="/home", views_dir="app/views")
    """

    # Auth pages
    login_path: str = "/login"
    register_path: str = "/register"
    redirect_query_key: str = "redirect"

    # Where authenticated users land
    landing_path: str = "/dashboard"

    # Not-found handling
    not_found_path: str = "/404"
    not_found_name: str = "NotFound"
    catch_all_name: str = "NotFoundCatchAll"
    catch_all_path: str = "/{path_match:path}"

    # Paths reachable without a token
    public_paths: frozenset[str] = frozenset({"/login", "/register", "/404"})

    # Guard
    max_redirects: int = 10

    # Views (``<views_dir>/<ComponentId>/index.py``)
    views_dir: str | Path | None = "views"

    # Menu API
    api_base_url: str = "http://127.0.0.1:8080/api"
    api_timeout: float = 10.0

    # Logging
    log_level: str = "info"

    @property
    def auth_paths(self) -> frozenset[str]:
        """Pages an authenticated user is bounced away from."""
        return frozenset({self.login_path, self.register_path})
