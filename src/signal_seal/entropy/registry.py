"""Name-based lookup of CSPRNG source classes.

Sources inside this package register with ``@register_entropy_source``.
Other distributions advertise theirs under the
``signal_seal.entropy_sources`` entry-point group. Plugin names are read
once, on the first lookup that needs them; a plugin class is imported only
when its name is actually requested.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING, Any, ClassVar

from signal_seal.entropy.base import EntropySource

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("signal_seal")

_ENTRY_POINT_GROUP = "signal_seal.entropy_sources"


class EntropySourceRegistry:
    """Class-level map from source name to :class:`EntropySource` subclass.

    A name registered in code shadows a plugin of the same name; the plugin
    is never imported.
    """

    _registry: ClassVar[dict[str, type[EntropySource]]] = {}
    _plugins: ClassVar[dict[str, Any]] = {}
    _discovered: ClassVar[bool] = False

    @classmethod
    def register(cls, name: str) -> Callable[[type[EntropySource]], type[EntropySource]]:
        """Class decorator binding *name* to the decorated source.

        Example::

            @EntropySourceRegistry.register("hsm")
            class HsmSource(EntropySource):
                ...
        """

        def decorator(source_cls: type[EntropySource]) -> type[EntropySource]:
            cls._registry[name] = source_cls
            cls._plugins.pop(name, None)
            return source_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[EntropySource]:
        """Return the class for *name*, importing a plugin if needed.

        Raises:
            KeyError: If no source of that name exists or its plugin failed
                to load.
        """
        found = cls._registry.get(name)
        if found is not None:
            return found

        cls._discover()
        entry_point = cls._plugins.pop(name, None)
        if entry_point is not None:
            loaded = cls._load(entry_point)
            if loaded is not None:
                cls._registry[name] = loaded
                return loaded

        known = ", ".join(cls.list_available()) or "(none)"
        raise KeyError(f"Unknown entropy source: {name!r}. Available: {known}")

    @classmethod
    def build(cls, name: str) -> EntropySource:
        """Instantiate the source registered under *name* with no arguments."""
        return cls.get(name)()

    @classmethod
    def list_available(cls) -> list[str]:
        """Sorted names of registered and discovered-but-unloaded sources."""
        cls._discover()
        return sorted(cls._registry.keys() | cls._plugins.keys())

    @classmethod
    def _discover(cls) -> None:
        if cls._discovered:
            return
        cls._discovered = True
        try:
            entry_points = importlib.metadata.entry_points(group=_ENTRY_POINT_GROUP)
        except Exception:  # Broken distribution metadata must not break lookups.
            logger.warning("Cannot read entry points for %s", _ENTRY_POINT_GROUP, exc_info=True)
            return
        for entry_point in entry_points:
            if entry_point.name not in cls._registry:
                cls._plugins[entry_point.name] = entry_point

    @staticmethod
    def _load(entry_point: Any) -> type[EntropySource] | None:
        try:
            loaded = entry_point.load()
        except Exception:  # A broken plugin is skipped, never fatal.
            logger.warning(
                "Entropy source plugin %r (%s) failed to import",
                entry_point.name,
                entry_point.value,
                exc_info=True,
            )
            return None
        if not (isinstance(loaded, type) and issubclass(loaded, EntropySource)):
            logger.warning(
                "Entropy source plugin %r (%s) is not an EntropySource subclass",
                entry_point.name,
                entry_point.value,
            )
            return None
        logger.debug("Loaded entropy source plugin %r", entry_point.name)
        return loaded


register_entropy_source = EntropySourceRegistry.register
