"""
Build session: recompilation driven by explicit draft updates.

The owner calls ``update`` whenever the draft changes, passing the validity
signals of the global parameters and the operation list. Output is cleared as
soon as either signal is false, so displayed XDR never disagrees with the
current input. Every update takes a generation number and a result is only
published if no newer generation has been published already.
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional
import logging

from .compiler import CompileOutcome, DraftLike, TransactionCompiler
from .models import CompiledTransaction

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[CompileOutcome]], Any]


class BuildSession:
    """Holds the latest compilation outcome of an edited draft."""

    def __init__(self, compiler: Optional[TransactionCompiler] = None):
        self.compiler = compiler or TransactionCompiler()
        self._listeners: List[Listener] = []
        self._generation = 0
        self._published = 0
        self._outcome: Optional[CompileOutcome] = None

    @property
    def generation(self) -> int:
        """Most recently issued generation."""
        return self._generation

    @property
    def outcome(self) -> Optional[CompileOutcome]:
        """Latest published outcome; None when output is cleared."""
        return self._outcome

    @property
    def result(self) -> Optional[CompiledTransaction]:
        return self._outcome.result if self._outcome is not None else None

    def add_listener(self, listener: Listener) -> None:
        """
        Register a callback invoked with each published outcome.

        Args:
            listener: Callable receiving the outcome, or None when cleared
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def publish(self, generation: int, outcome: Optional[CompileOutcome]) -> bool:
        """
        Publish an outcome for ``generation``.

        Returns:
            False (and nothing is published) if a newer generation is already out
        """
        if generation <= self._published:
            logger.debug(f"Dropping stale outcome for generation {generation} "
                         f"(published {self._published})")
            return False
        self._published = generation
        self._outcome = outcome
        for listener in list(self._listeners):
            listener(outcome)
        return True

    def update(self, draft: DraftLike, params_valid: bool = True,
               operations_valid: bool = True) -> Optional[CompileOutcome]:
        """
        Recompile after a draft change.

        Args:
            draft: Current draft
            params_valid: Whether the global transaction parameters are valid
            operations_valid: Whether the operation list is valid

        Returns:
            The new outcome, or None if output was cleared
        """
        generation = self.next_generation()
        if not (params_valid and operations_valid):
            self.publish(generation, None)
            return None
        outcome = self.compiler.try_compile(draft)
        self.publish(generation, outcome)
        return outcome

    def clear(self) -> None:
        self.publish(self.next_generation(), None)


__all__ = ["BuildSession", "Listener"]
