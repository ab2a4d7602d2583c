"""
Correction - A named, deferred unit of remedial work

The diff engine builds corrections; the caller runs them. Implementation of
the action is up to the specific provider.
"""

import logging
from typing import Callable

from ..utils.errors import CorrectionError

logger = logging.getLogger(__name__)


class Correction:
    """A description plus a zero-argument action that may raise."""

    def __init__(self, msg: str, f: Callable[[], None]):
        if not callable(f):
            raise TypeError(f"Correction action for {msg!r} is not callable")
        self.msg = msg
        self.f = f
        self.executed = False

    def run(self):
        """
        Execute the action exactly once.

        Exceptions raised by the action propagate to the caller. The
        correction counts as executed even when the action fails.

        Raises:
            CorrectionError: if the correction has already been run
        """
        if self.executed:
            raise CorrectionError(f"Correction already executed: {self.msg}")
        self.executed = True
        logger.info(f"Running correction: {self.msg}")
        return self.f()

    def __call__(self):
        return self.run()

    def __str__(self) -> str:
        return self.msg

    def __repr__(self) -> str:
        return f"<Correction {self.msg!r} executed={self.executed}>"
