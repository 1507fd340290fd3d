# src/taskpulse/core/lifecycle.py

from __future__ import annotations

import logging
from enum import StrEnum

from .ports import LifecycleParticipant

logger = logging.getLogger(__name__)


class LifecyclePhase(StrEnum):
    """
    Externally reported activity state of the running app.

    - ACTIVE: in the foreground, the user is interacting
    - INACTIVE: visible but not receiving input (transient)
    - BACKGROUND: not visible; the process may be killed at any moment
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"

    @classmethod
    def parse(cls, raw: str) -> LifecyclePhase:
        key = (raw or "").strip().lower()
        aliases = {"a": cls.ACTIVE, "i": cls.INACTIVE, "b": cls.BACKGROUND, "bg": cls.BACKGROUND}
        if key in aliases:
            return aliases[key]
        return cls(key)


class LifecycleMonitor:
    """
    Holds the current phase and fans real changes out to participants.

    The phase starts as ACTIVE. Repeating the current phase is not a
    transition and does not reach participants.
    """

    def __init__(self, initial: LifecyclePhase = LifecyclePhase.ACTIVE) -> None:
        self._phase = initial
        self._participants: list[LifecycleParticipant] = []

    @property
    def phase(self) -> LifecyclePhase:
        return self._phase

    def register(self, participant: LifecycleParticipant) -> None:
        if participant not in self._participants:
            self._participants.append(participant)

    def transition(self, new_phase: LifecyclePhase) -> bool:
        """
        Move to new_phase. Returns True when the phase actually changed.

        Participants run in registration order; one failing participant does
        not stop the others (a save that fails must not skip a release).
        """
        old_phase = self._phase
        if new_phase == old_phase:
            logger.debug("Lifecycle phase unchanged (%s)", new_phase.value)
            return False

        self._phase = new_phase
        logger.info("Lifecycle phase %s -> %s", old_phase.value, new_phase.value)

        for participant in list(self._participants):
            try:
                participant.on_lifecycle_change(new_phase)
            except Exception:
                logger.exception(
                    "Lifecycle participant %r failed on %s", participant, new_phase.value
                )
        return True
