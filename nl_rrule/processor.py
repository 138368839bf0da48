"""Run every enabled recognizer over every clause.

A failing recognizer or tagger never aborts the run: the exception is
logged and turned into a warning on the clause it happened in.
"""
import dataclasses
from datetime import date
import logging
from typing import Callable, Iterable

from .models import Clause, ClauseResult, ParserConfig
from .patterns.base import MatchContext
from .registry import DEFAULT_REGISTRY, HandlerRegistry
from .tagging import TaggingAdapter

logger = logging.getLogger(__name__)


def process(
    clauses: Iterable[Clause],
    registry: HandlerRegistry = DEFAULT_REGISTRY,
    config: ParserConfig | None = None,
    *,
    adapter: TaggingAdapter | None = None,
    anchor: date | None = None,
    resolver: Callable | None = None,
) -> list[ClauseResult]:
    if config is not None:
        registry = registry.enabled(config.enabled_categories, config.disabled_categories)
    adapter = adapter or TaggingAdapter()
    anchor = anchor or date.today()
    results: list[ClauseResult] = []
    for clause in clauses:
        try:
            doc = adapter.tag(clause.text)
        except Exception:
            logger.exception('tagging failed for clause %r', clause.text)
            results.append(ClauseResult(clause.index, clause.text, (),
                                        (f'Could not analyze "{clause.text}"',)))
            continue
        ctx = MatchContext(anchor=anchor, resolver=resolver, clause_index=clause.index)
        matches = []
        for handler in registry:
            try:
                match = handler.recognize(doc, ctx)
            except Exception:
                logger.exception('pattern handler %s failed on %r', handler.name, clause.text)
                ctx.warn(f'Pattern "{handler.name}" failed on "{clause.text}"')
                continue
            if match is None:
                continue
            logger.debug('%s matched %r in clause %d', handler.name, match.source_text, clause.index)
            matches.append(dataclasses.replace(match, handler=handler.name, clause_index=clause.index))
        results.append(ClauseResult(clause.index, clause.text, tuple(matches), tuple(ctx.warnings)))
    return results
