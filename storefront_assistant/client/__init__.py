"""
Storefront-side client: REST API access, listing state and the avatar sequencer.
"""

from storefront_assistant.client.api import AssistantClient
from storefront_assistant.client.playback import (
    AudioPlayer,
    NullAudioPlayer,
    PlaybackError,
    SubprocessAudioPlayer,
)
from storefront_assistant.client.sequencer import (
    ANIMATIONS,
    Animation,
    PlaybackFinished,
    ReactionSequencer,
    ReactionType,
    RecordingChanged,
    ResultArrived,
    Stage,
    TimerExpired,
    Visual,
    VisualState,
)
from storefront_assistant.client.view_state import StorefrontViewState

__all__ = [
    "AssistantClient",
    "AudioPlayer",
    "NullAudioPlayer",
    "PlaybackError",
    "SubprocessAudioPlayer",
    "ReactionSequencer",
    "ResultArrived",
    "RecordingChanged",
    "TimerExpired",
    "PlaybackFinished",
    "Stage",
    "Visual",
    "VisualState",
    "ReactionType",
    "Animation",
    "ANIMATIONS",
    "StorefrontViewState",
]
