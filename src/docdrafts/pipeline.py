# pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Protocol, runtime_checkable

from .model import BuildContext

logger = logging.getLogger(__name__)

# Stages ordered below this run before anything is rendered.
RENDER_ORDER = 1.0


@runtime_checkable
class Stage(Protocol):
    """A build stage: given the build context, produce side effects."""

    name: str
    order: float

    def run(self, context: BuildContext) -> None: ...


@dataclass(frozen=True)
class FunctionStage:
    """Wrap a plain callable as a stage."""
    name: str
    fn: Callable[[BuildContext], None]
    order: float = RENDER_ORDER

    def run(self, context: BuildContext) -> None:
        self.fn(context)


def stage(name: str, fn: Callable[[BuildContext], None], *, order: float = RENDER_ORDER) -> FunctionStage:
    return FunctionStage(name=name, fn=fn, order=order)


def ordered(stages: Iterable[Stage]) -> List[Stage]:
    """Stages sorted by `order`; ties keep their given order."""
    return sorted(stages, key=lambda s: s.order)


def run_pipeline(stages: Iterable[Stage], context: BuildContext) -> None:
    """
    Run each stage once, in order, on the same context.

    Single-threaded: a stage sees every mutation made by the stages before it.
    An exception from a stage stops the pipeline and propagates.
    """
    plan = ordered(stages)
    for idx, st in enumerate(plan, start=1):
        logger.debug("Stage %d/%d: %s (order=%s)", idx, len(plan), st.name, st.order)
        st.run(context)
