"""Loadable view units and startup view discovery.

A :class:`ViewUnit` names a view and knows where to load it from, but
loads nothing until :meth:`ViewUnit.load` is called. Discovery walks a
views directory once at startup and builds the registry the
:class:`~perch.resolver.ComponentResolver` consults::

    views/
        Dashboard/index.py         -> "Dashboard"
        Tools/Paste/index.py       -> "Tools/Paste"
        NotFound/index.py          -> "NotFound"
"""

from __future__ import annotations

import importlib.util
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Convention: one ``index.py`` per view directory
INDEX_FILE = "index.py"


@dataclass(frozen=True, slots=True)
class ViewUnit:
    """A lazily loadable view.

    Attributes:
        name: Logical view id (``"Tools/Paste"``) or built-in name.
        source: ``index.py`` to import on first load, if any.
        loader: Explicit loader callable; wins over *source*.
    """

    name: str
    source: Path | None = None
    loader: Callable[[], Any] | None = field(default=None, compare=False, repr=False)

    @property
    def is_builtin(self) -> bool:
        return self.source is None and self.loader is None

    def load(self) -> Any:
        """Load the view.

        Returns the module's ``view`` attribute when it defines one,
        otherwise the module itself. Built-in units load as ``None``.
        """
        if self.loader is not None:
            return self.loader()
        if self.source is None:
            return None

        module_name = "_perch_view_" + self.name.replace("/", "_")
        spec = importlib.util.spec_from_file_location(module_name, self.source)
        if spec is None or spec.loader is None:
            msg = f"Cannot load view {self.name!r} from {self.source}"
            raise ImportError(msg)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return getattr(module, "view", module)


# Built-in units the compiler places by structure, never by lookup
SHELL_LAYOUT = ViewUnit(name="Layout")
PASS_THROUGH = ViewUnit(name="RouterView")
NOT_FOUND_VIEW = ViewUnit(name="NotFound")


def discover_views(views_dir: str | Path) -> dict[str, ViewUnit]:
    """Walk a views directory and register every ``<id>/index.py``.

    Args:
        views_dir: Root of the views tree.

    Returns:
        Mapping of logical id to :class:`ViewUnit`, sorted by id.
        Nothing is imported.
    """
    root = Path(views_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Views directory not found: {root}")

    registry: dict[str, ViewUnit] = {}
    for index in sorted(root.rglob(INDEX_FILE)):
        relative = index.parent.relative_to(root)
        if not relative.parts:
            continue
        if any(part.startswith(("_", ".")) for part in relative.parts):
            continue
        logical_id = "/".join(relative.parts)
        registry[logical_id] = ViewUnit(name=logical_id, source=index)
    return registry
