"""Stopping strategies for the thread planner."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .planner import ThreadPlanner

logger = logging.getLogger(__name__)

# Hard limit on planned moves for loss based planning
MAX_LOSS_MOVES = 3000
MIN_LOSS_WAIT = 20


class PlanningStrategy(ABC):
    """Decides when the thread planner should stop adding lines."""

    @abstractmethod
    def completed(self, planner: ThreadPlanner, moves: Sequence[int]) -> bool:
        """Return True once planning should stop.

        Args:
            planner: The planner being run, with its current image mask
            moves: Anchor indices planned so far, starting with the start anchor
        """


@dataclass
class CountTracker(PlanningStrategy):
    """Stop after a fixed number of lines have been drawn."""

    count: int

    def completed(self, planner: ThreadPlanner, moves: Sequence[int]) -> bool:
        return len(moves) > self.count


@dataclass
class LossTracker(PlanningStrategy):
    """Stop once the remaining image loss drops below a target.

    Computing the loss touches the whole mask, so it is only evaluated every
    `wait` steps. The interval halves after each evaluation, down to a
    minimum of 20 steps. Planning always stops after 3000 moves.
    """

    wait: int
    target_loss: float
    current: int = field(default=0, init=False)

    def completed(self, planner: ThreadPlanner, moves: Sequence[int]) -> bool:
        if len(moves) > MAX_LOSS_MOVES:
            logger.warning("Loss target %g not reached after %d moves", self.target_loss, MAX_LOSS_MOVES)
            return True

        if self.current >= self.wait:
            loss = planner.loss()
            logger.debug("Loss after %d moves: %g", len(moves), loss)

            if loss < self.target_loss:
                return True

            self.wait = max(self.wait // 2, MIN_LOSS_WAIT)
            self.current = 0

        self.current += 1

        return False
