"""
CVFS Subsystem Base

Lifecycle shared by long-lived components. A component moves
CREATED -> INITIALIZED -> RUNNING -> STOPPED; ``initialize`` may be
called again from any state to start over.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from enum import Enum, auto

from cvfs.logger import Logger, get_logger


class SubsystemState(Enum):
    """Lifecycle state of a subsystem."""
    CREATED = auto()
    INITIALIZED = auto()
    RUNNING = auto()
    STOPPED = auto()


_ALLOWED = {
    SubsystemState.INITIALIZED: set(SubsystemState),
    SubsystemState.RUNNING: {SubsystemState.INITIALIZED, SubsystemState.STOPPED},
    SubsystemState.STOPPED: {SubsystemState.RUNNING},
}


class Subsystem(ABC):
    """
    Base class for a named component with its own logger.

    Subclasses implement ``initialize``; ``cleanup`` is optional.
    """

    def __init__(self, name: str):
        self._name = name
        self._logger = get_logger(name)
        self._state = SubsystemState.CREATED

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> SubsystemState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SubsystemState.RUNNING

    @property
    def logger(self) -> Logger:
        return self._logger

    def set_state(self, state: SubsystemState) -> None:
        """
        Move to ``state``.

        Raises:
            RuntimeError: If the move is not allowed from the current state
        """
        if self._state not in _ALLOWED.get(state, set()):
            raise RuntimeError(
                f"{self._name}: cannot go from {self._state.name} to {state.name}"
            )
        previous, self._state = self._state, state
        self._logger.debug(
            "State changed",
            context={'from': previous.name, 'to': state.name}
        )

    @abstractmethod
    def initialize(self) -> None:
        """Build fresh internal state and move to INITIALIZED."""

    def start(self) -> None:
        self.set_state(SubsystemState.RUNNING)

    def stop(self) -> None:
        self.set_state(SubsystemState.STOPPED)

    def cleanup(self) -> None:
        """Release resources held while running."""
