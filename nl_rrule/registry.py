"""Immutable, priority-ordered collection of recognizers."""
import logging
from typing import Iterable

from .errors import ConfigurationError
from .patterns import HandlerDescriptor, default_handlers

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Recognizers sorted by priority, highest first.

    Ties keep registration order. The registry is built once and never
    mutated; ``enabled()`` returns a filtered copy.
    """

    def __init__(self, handlers: Iterable[HandlerDescriptor]):
        handlers = list(handlers)
        seen = set()
        for h in handlers:
            if not isinstance(h, HandlerDescriptor):
                raise ConfigurationError(f'not a pattern handler: {h!r}')
            if h.name in seen:
                raise ConfigurationError(f'duplicate pattern handler name {h.name!r}')
            seen.add(h.name)
        # sorted() is stable so equal priorities keep registration order
        self._handlers = tuple(sorted(handlers, key=lambda h: -h.priority))
        self._by_name = {h.name: h for h in self._handlers}

    def __iter__(self):
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, name) -> bool:
        return name in self._by_name

    def get(self, name: str) -> HandlerDescriptor | None:
        return self._by_name.get(name)

    def priority_of(self, name: str) -> int:
        h = self._by_name.get(name)
        return h.priority if h is not None else 0

    @property
    def categories(self) -> frozenset:
        return frozenset(h.category for h in self._handlers)

    def enabled(self, enabled=None, disabled=()) -> 'HandlerRegistry':
        """Copy restricted to ``enabled`` categories minus ``disabled`` ones."""
        keep = [
            h for h in self._handlers
            if (enabled is None or h.category in enabled) and h.category not in (disabled or ())
        ]
        return HandlerRegistry(keep)

    def describe(self) -> list[dict]:
        return [
            {'name': h.name, 'category': h.category, 'priority': h.priority, 'description': h.description}
            for h in self._handlers
        ]


DEFAULT_REGISTRY = HandlerRegistry(default_handlers())
