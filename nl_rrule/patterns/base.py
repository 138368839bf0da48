"""Building blocks shared by every recognizer."""
from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Callable, Sequence

from ..constants import CATEGORIES
from ..errors import ConfigurationError
from ..models import PatternMatch

logger = logging.getLogger(__name__)


@dataclass
class MatchContext:
    """Per-clause inputs a matcher may need besides the tagged text."""
    anchor: date
    resolver: Callable | None = None
    clause_index: int = 0
    warnings: list = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


@dataclass(frozen=True)
class HandlerDescriptor:
    name: str
    category: str
    priority: int
    matchers: tuple
    processor: Callable
    description: str = ''

    def recognize(self, doc, context: MatchContext) -> PatternMatch | None:
        """Run matchers in order; the first one that returns a match wins."""
        for matcher in self.matchers:
            result = matcher(doc, context)
            if result is not None:
                return result
        return None


def create_pattern_handler(
    name: str,
    matchers: Sequence[Callable],
    processor: Callable,
    category: str,
    priority: int,
    description: str = '',
) -> HandlerDescriptor:
    """Validate and assemble a recognizer.

    ``matchers`` are ``(doc, context) -> PatternMatch | None`` callables and
    must not mutate anything. ``processor`` is ``(working, match) -> None``
    and applies a match to the combiner's working descriptor.
    """
    if not name or not isinstance(name, str):
        raise ConfigurationError('pattern handler needs a name')
    if category not in CATEGORIES:
        raise ConfigurationError(f'{name}: unknown category {category!r}')
    matchers = tuple(matchers or ())
    if not matchers:
        raise ConfigurationError(f'{name}: at least one matcher is required')
    for m in matchers:
        if not callable(m):
            raise ConfigurationError(f'{name}: matcher {m!r} is not callable')
    if not callable(processor):
        raise ConfigurationError(f'{name}: processor is not callable')
    if not isinstance(priority, int) or isinstance(priority, bool):
        raise ConfigurationError(f'{name}: priority must be an integer')
    return HandlerDescriptor(name, category, priority, matchers, processor, description)


def make_match(category: str, value: dict, span, confidence: float = 1.0, warnings=()) -> PatternMatch:
    text = span.text if hasattr(span, 'text') else str(span)
    return PatternMatch(type=category, value=value, source_text=text,
                        confidence=confidence, warnings=tuple(warnings))
