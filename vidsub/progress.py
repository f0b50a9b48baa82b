"""Tracks a processing run through its linear progress states."""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)


class ProcessingState(enum.Enum):
    IDLE = "idle"
    TRANSCRIBING = "transcribing"
    TRANSLATING = "translating"
    GENERATING = "generating"
    COMPLETED = "completed"


# Order a run moves through once started.
RUN_ORDER = [
    ProcessingState.TRANSCRIBING,
    ProcessingState.TRANSLATING,
    ProcessingState.GENERATING,
    ProcessingState.COMPLETED,
]

# The working steps shown while a run is in flight.
PROCESSING_STEPS = [
    (ProcessingState.TRANSCRIBING, "Transcribing Audio", "Converting speech to text"),
    (ProcessingState.TRANSLATING, "Translating to English", "Translating each segment in order"),
    (ProcessingState.GENERATING, "Generating SRT File", "Creating subtitle file with timestamps"),
]


@dataclass(frozen=True)
class ProgressEvent:
    """A progress notification reported by the processing pipeline."""
    step: ProcessingState
    percent: int = 0

    @classmethod
    def from_callback(cls, step: str, percent: int) -> "ProgressEvent":
        """
        Converts a string-named progress callback into an event.

        Raises:
            ValueError: If the step name is unknown or names the idle state.
        """
        state = ProcessingState(step)
        if state is ProcessingState.IDLE:
            raise ValueError("Progress events cannot report the idle state.")
        return cls(step=state, percent=int(percent))


Listener = Callable[[ProcessingState, int], None]


class ProgressTracker:
    """
    State machine for one processing run at a time.

    idle -> transcribing -> translating -> generating -> completed, with any
    in-flight state falling back to idle on failure. Events are checked against
    the current state; out-of-order or late events are logged and ignored.
    """

    def __init__(self):
        self.state = ProcessingState.IDLE
        self.file_name: Optional[str] = None
        self.percent = 0
        self._listeners: List[Listener] = []

    @property
    def in_flight(self) -> bool:
        return self.state not in (ProcessingState.IDLE, ProcessingState.COMPLETED)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _set(self, state: ProcessingState, percent: int) -> None:
        self.state = state
        self.percent = percent
        for listener in self._listeners:
            listener(state, percent)

    def begin(self, file_name: str) -> None:
        """
        Starts a run for the given file.

        Raises:
            InvalidTransitionError: If the tracker is not idle.
        """
        if self.state is not ProcessingState.IDLE:
            raise InvalidTransitionError(
                f"Cannot start processing '{file_name}' while in state '{self.state.value}'."
            )
        self.file_name = file_name
        logger.info(f"Processing started for: {file_name}")
        self._set(ProcessingState.TRANSCRIBING, 0)

    def handle(self, event: ProgressEvent) -> bool:
        """
        Applies a progress event if it is valid from the current state.

        Returns:
            True if the event was applied, False if it was rejected.
        """
        if not self.in_flight:
            logger.warning(
                f"Ignoring progress event '{event.step.value}': no run in flight (state '{self.state.value}')."
            )
            return False
        current = RUN_ORDER.index(self.state)
        if event.step is self.state or (
            event.step in RUN_ORDER and RUN_ORDER.index(event.step) == current + 1
        ):
            self._set(event.step, event.percent)
            logger.debug(f"Progress: {event.step.value} ({event.percent}%)")
            return True
        logger.warning(
            f"Rejected out-of-order progress event '{event.step.value}' in state '{self.state.value}'."
        )
        return False

    def on_progress(self, step: str, percent: int) -> bool:
        """Progress callback in the pipeline's (step name, percent) form."""
        return self.handle(ProgressEvent.from_callback(step, percent))

    def fail(self) -> None:
        """Drops the current run and returns to idle."""
        if self.file_name is not None:
            logger.info(f"Processing aborted for: {self.file_name}")
        self.file_name = None
        self._set(ProcessingState.IDLE, 0)

    def reset(self) -> None:
        """
        Returns to idle after a finished run.

        Raises:
            InvalidTransitionError: If a run is still in flight.
        """
        if self.in_flight:
            raise InvalidTransitionError(
                f"Cannot reset while '{self.file_name}' is {self.state.value}."
            )
        self.file_name = None
        self._set(ProcessingState.IDLE, 0)

    def step_progress(self) -> float:
        """Completion in percent based on the current working step."""
        if self.state is ProcessingState.COMPLETED:
            return 100.0
        steps = [state for state, _, _ in PROCESSING_STEPS]
        if self.state not in steps:
            return 0.0
        return (steps.index(self.state) + 1) / len(steps) * 100

    def step_statuses(self) -> List[Tuple[str, str, str]]:
        """(title, description, status) for each working step."""
        steps = [state for state, _, _ in PROCESSING_STEPS]
        if self.state is ProcessingState.COMPLETED:
            current = len(steps)
        elif self.state in steps:
            current = steps.index(self.state)
        else:
            current = -1
        statuses = []
        for index, (_, title, description) in enumerate(PROCESSING_STEPS):
            if index < current:
                status = "Completed"
            elif index == current:
                status = "Processing..."
            else:
                status = "Pending"
            statuses.append((title, description, status))
        return statuses
