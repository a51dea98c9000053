from .ari_client import AriClient
from .controller import BridgesController
from .event_bus import EventBus, Subscription, event_key
from .errors import (
    AriError,
    InvalidParameterError,
    NotFoundError,
    ConflictError,
    UnprocessableEntityError,
    ResourceDecodeError,
)
from .models.event_type import EventType
from .models.events import Event, BridgeCreatedEvent, BridgeDestroyedEvent, BridgeMergedEvent
from .models.resource import Resource
from .models.bridge import Bridge, BridgeType, VideoMode
from .models.playback import Playback, PlaybackState
from .models.live_recording import LiveRecording, RecordingState

__all__ = [
    "AriClient",
    "BridgesController",
    "EventBus",
    "Subscription",
    "event_key",
    "AriError",
    "InvalidParameterError",
    "NotFoundError",
    "ConflictError",
    "UnprocessableEntityError",
    "ResourceDecodeError",
    "EventType",
    "Event",
    "BridgeCreatedEvent",
    "BridgeDestroyedEvent",
    "BridgeMergedEvent",
    "Resource",
    "Bridge",
    "BridgeType",
    "VideoMode",
    "Playback",
    "PlaybackState",
    "LiveRecording",
    "RecordingState",
]
