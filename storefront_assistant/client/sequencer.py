"""
Client-side reaction sequencer for the assistant avatar.

When a result arrives the avatar first reacts (an approving nod for a known
command, a shrug for an unknown one), then either speaks the response or
looks confused for a while, then goes back to waiting. A newer result
preempts whatever sequence is running.

All state changes go through ``ReactionSequencer.dispatch``. Timers and the
playback task carry the generation they were started in; events from an
older generation are dropped, so a superseded sequence can never touch the
current one.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from storefront_assistant.assistant.actions import ActionKind, AssistantResult
from storefront_assistant.client.playback import AudioPlayer
from storefront_assistant.config import get_config

logger = logging.getLogger(__name__)


class VisualState(str, Enum):
    WAITING = "waiting"
    LISTENING = "listening"
    REACTING = "reacting"
    TALKING = "talking"
    CONFUSED = "confused"


class ReactionType(str, Enum):
    APPROVAL = "approval"
    SHOULDERS = "shoulders"


@dataclass(frozen=True)
class Animation:
    """Avatar clip and whether it loops."""

    asset: str
    loop: bool


# Confused reuses the shrug clip
ANIMATIONS: dict[tuple[VisualState, ReactionType | None], Animation] = {
    (VisualState.WAITING, None): Animation("waiting6.glb", loop=True),
    (VisualState.LISTENING, None): Animation("listening.glb", loop=True),
    (VisualState.REACTING, ReactionType.APPROVAL): Animation("approval.glb", loop=False),
    (VisualState.REACTING, ReactionType.SHOULDERS): Animation("shoulders.glb", loop=False),
    (VisualState.TALKING, None): Animation("talking.glb", loop=True),
    (VisualState.CONFUSED, None): Animation("shoulders.glb", loop=False),
}


@dataclass(frozen=True)
class Visual:
    """What the avatar currently shows."""

    state: VisualState
    reaction: ReactionType | None = None

    @property
    def animation(self) -> Animation:
        return ANIMATIONS[(self.state, self.reaction)]


WAITING = Visual(VisualState.WAITING)


class Stage(str, Enum):
    """Timed stages of a sequence."""

    REACTION = "reaction"
    CONFUSED = "confused"


@dataclass(frozen=True)
class ResultArrived:
    result: AssistantResult


@dataclass(frozen=True)
class RecordingChanged:
    recording: bool


@dataclass(frozen=True)
class TimerExpired:
    generation: int
    stage: Stage


@dataclass(frozen=True)
class PlaybackFinished:
    generation: int


Event = Union[ResultArrived, RecordingChanged, TimerExpired, PlaybackFinished]


class ReactionSequencer:
    """
    Drives the avatar through react -> talk/confused -> wait.

    Must be used from a running event loop. The visible ``Visual`` is
    recomputed once per dispatched event by fixed priority
    (confused > reacting > talking > listening > waiting) and listeners are
    notified only when it changes.

    Usage:
        sequencer = ReactionSequencer(SubprocessAudioPlayer())
        sequencer.add_listener(lambda visual: print(visual.animation.asset))
        sequencer.dispatch(ResultArrived(result))
    """

    def __init__(
        self,
        player: AudioPlayer,
        reaction_seconds: float | None = None,
        confused_seconds: float | None = None,
    ):
        """
        Args:
            player: Player used for response audio
            reaction_seconds: Length of the approval/shrug reaction
            confused_seconds: Length of the confused stage after a shrug
        """
        config = get_config().sequencer
        self._player = player
        self._reaction_seconds = config.reaction_seconds if reaction_seconds is None else reaction_seconds
        self._confused_seconds = config.confused_seconds if confused_seconds is None else confused_seconds

        self._generation = 0
        self._timer: asyncio.TimerHandle | None = None
        self._playback: asyncio.Task | None = None
        self._listeners: list[Callable[[Visual], None]] = []
        self._closed = False

        self._is_recording = False
        self._is_reacting = False
        self._reaction: ReactionType | None = None
        self._is_talking = False
        self._is_confused = False
        self._pending_audio = ""

        self._visual = WAITING

    @property
    def visual(self) -> Visual:
        return self._visual

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_recording(self) -> bool:
        return self._is_recording

    def add_listener(self, callback: Callable[[Visual], None]) -> None:
        """Call ``callback(visual)`` whenever the visible state changes."""
        self._listeners.append(callback)

    def dispatch(self, event: Event) -> None:
        """Apply one event and refresh the visible state."""
        if self._closed:
            return

        if isinstance(event, ResultArrived):
            self._on_result(event.result)
        elif isinstance(event, RecordingChanged):
            self._is_recording = event.recording
        elif isinstance(event, TimerExpired):
            if event.generation != self._generation:
                logger.debug("Dropping stale %s timer", event.stage.value)
                return
            self._on_timer(event.stage)
        elif isinstance(event, PlaybackFinished):
            if event.generation != self._generation:
                return
            self._is_talking = False
            self._pending_audio = ""
        else:
            raise TypeError(f"Unknown event: {event!r}")

        self._refresh()

    def close(self) -> None:
        """Stop everything; later events are ignored."""
        self._preempt()
        self._reset()
        self._is_recording = False
        self._refresh()
        self._closed = True

    # === Transitions ===

    def _on_result(self, result: AssistantResult) -> None:
        self._preempt()
        self._reset()

        if result.error is not None or result.action is None:
            return

        if result.action == ActionKind.UNKNOWN.value:
            self._start_reaction(ReactionType.SHOULDERS)
        elif result.has_audio:
            self._pending_audio = result.audio
            self._start_reaction(ReactionType.APPROVAL)

    def _on_timer(self, stage: Stage) -> None:
        self._timer = None

        if stage is Stage.REACTION:
            reaction = self._reaction
            self._is_reacting = False
            self._reaction = None

            if reaction is ReactionType.SHOULDERS:
                self._is_confused = True
                self._schedule(self._confused_seconds, Stage.CONFUSED)
            elif self._pending_audio:
                self._is_talking = True
                self._playback = asyncio.get_running_loop().create_task(
                    self._play(self._generation, self._pending_audio)
                )

        elif stage is Stage.CONFUSED:
            self._is_confused = False

    def _start_reaction(self, reaction: ReactionType) -> None:
        self._is_reacting = True
        self._reaction = reaction
        self._schedule(self._reaction_seconds, Stage.REACTION)

    def _schedule(self, delay: float, stage: Stage) -> None:
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            delay, self.dispatch, TimerExpired(self._generation, stage)
        )

    async def _play(self, generation: int, payload: str) -> None:
        try:
            await self._player.play(payload)
        except Exception:
            logger.exception("Audio playback failed")
        self.dispatch(PlaybackFinished(generation))

    def _preempt(self) -> None:
        self._generation += 1

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if self._playback is not None:
            self._playback.cancel()
            self._playback = None

        self._player.stop()

    def _reset(self) -> None:
        self._is_reacting = False
        self._reaction = None
        self._is_talking = False
        self._is_confused = False
        self._pending_audio = ""

    # === Visible state ===

    def _compute_visual(self) -> Visual:
        if self._is_confused:
            return Visual(VisualState.CONFUSED)
        if self._is_reacting:
            return Visual(VisualState.REACTING, self._reaction)
        if self._is_talking:
            return Visual(VisualState.TALKING)
        if self._is_recording:
            return Visual(VisualState.LISTENING)
        return WAITING

    def _refresh(self) -> None:
        visual = self._compute_visual()
        if visual == self._visual:
            return

        logger.debug("Avatar: %s -> %s", self._visual.state.value, visual.state.value)
        self._visual = visual
        for callback in self._listeners:
            callback(visual)
