from pydantic import Field, field_validator
from typing import List, Optional, Tuple, Union
from datetime import datetime
from enum import Enum
from .resource import Resource
from .playback import Playback
from .live_recording import LiveRecording
from .event_type import EventType
from ..event_bus import Handler, Subscription
import re


class BridgeType(str, Enum):
    MIXING = "mixing"
    HOLDING = "holding"


class VideoMode(str, Enum):
    NONE = "none"
    TALKER = "talker"
    SFU = "sfu"
    SINGLE = "single"


class Bridge(Resource):
    """
    The merging of media from one or more channels.
    Everyone on the bridge receives the same audio.
    """
    id: str = Field(..., description="Unique identifier for this bridge")
    technology: str = Field(..., description="Name of the current bridging technology")
    bridge_type: BridgeType = Field(..., description="Type of bridge technology")
    bridge_class: str = Field(..., description="Bridging class")
    creator: str = Field(..., description="Entity that created the bridge")
    name: str = Field(..., description="Name the creator gave the bridge")
    channels: Tuple[str, ...] = Field(default_factory=tuple, description="Ids of channels participating in this bridge")
    video_mode: Optional[VideoMode] = Field(default=None, description="The video mode the bridge is using")
    video_source_id: Optional[str] = Field(default=None, description="The ID of the channel that is the source of video in this bridge, if one exists")
    creationtime: Optional[datetime] = Field(default=None, description="Timestamp when bridge was created")

    @field_validator("creationtime", mode="before")
    @classmethod
    def validate_creationtime(cls, v: Optional[str | datetime]) -> Optional[datetime]:
        if isinstance(v, str):
            # Handle timezone offset without colon (e.g., +0300 -> +03:00)
            v = re.sub(r'([+-])(\d{2})(\d{2})$', r'\1\2:\3', v)
            return datetime.fromisoformat(v)
        return v

    def on_bridge_created(self, handler: Handler) -> Subscription:
        return self.on(EventType.BRIDGE_CREATED, handler)

    def once_bridge_created(self, handler: Handler) -> Subscription:
        return self.once(EventType.BRIDGE_CREATED, handler)

    def on_bridge_destroyed(self, handler: Handler) -> Subscription:
        return self.on(EventType.BRIDGE_DESTROYED, handler)

    def once_bridge_destroyed(self, handler: Handler) -> Subscription:
        return self.once(EventType.BRIDGE_DESTROYED, handler)

    def on_bridge_merged(self, handler: Handler) -> Subscription:
        return self.on(EventType.BRIDGE_MERGED, handler)

    def once_bridge_merged(self, handler: Handler) -> Subscription:
        return self.once(EventType.BRIDGE_MERGED, handler)

    async def delete_bridge(self) -> None:
        """
        Shut down the bridge. Channels still in it are removed and resume
        whatever they were doing beforehand.

        Raises:
            NotFoundError: bridge not found
        """
        await self.client.bridges().delete_bridge(self.id)

    async def add_channel(self, channel: Union[str, List[str]], role: Optional[str] = None) -> None:
        """
        Add one or more channels to the bridge.

        Args:
            channel: Id of the channel to add; comma separated ids or a list add several
            role: Channel's role in the bridge

        Raises:
            NotFoundError: bridge not found
            ConflictError: bridge not in Stasis application, or channel currently recording
            UnprocessableEntityError: channel not found or not in Stasis application
        """
        await self.client.bridges().add_channel(self.id, channel, role)

    async def remove_channel(self, channel: Union[str, List[str]]) -> None:
        """
        Remove one or more channels from the bridge.

        Raises:
            NotFoundError: bridge not found
            ConflictError: bridge not in Stasis application
            UnprocessableEntityError: channel not in this bridge
        """
        await self.client.bridges().remove_channel(self.id, channel)

    async def start_music_on_hold(self, moh_class: Optional[str] = None) -> None:
        """Play music on hold to the bridge, or change the MOH class that is playing"""
        await self.client.bridges().start_music_on_hold(self.id, moh_class)

    async def stop_music_on_hold(self) -> None:
        """Stop music on hold started with start_music_on_hold"""
        await self.client.bridges().stop_music_on_hold(self.id)

    async def play_media(
        self,
        media: str,
        lang: Optional[str] = None,
        offsetms: Optional[int] = None,
        skipms: Optional[int] = None,
        playback_id: Optional[str] = None,
    ) -> Playback:
        """
        Start playback of media on the bridge.

        The media URI may be any of sound:, recording:, number:, digits:,
        characters: or tone:. The returned playback can be used to control
        the playback (pause, rewind, fast forward, etc.)

        Args:
            media: Media URI to play
            lang: For sounds, selects language for sound
            offsetms: Number of milliseconds to skip before playing
            skipms: Number of milliseconds to skip for forward/reverse operations (server default 3000)
            playback_id: Playback id

        Raises:
            NotFoundError: bridge not found
            ConflictError: bridge not in a Stasis application
        """
        return await self.client.bridges().play_media(self.id, media, lang, offsetms, skipms, playback_id)

    async def play_media_with_id(
        self,
        media: str,
        lang: Optional[str] = None,
        offsetms: Optional[int] = None,
        skipms: Optional[int] = None,
        playback_id: Optional[str] = None,
    ) -> Playback:
        """Same as play_media, but the playback id is part of the request path"""
        return await self.client.bridges().play_media_with_id(self.id, media, lang, offsetms, skipms, playback_id)

    async def record(
        self,
        name: str,
        format: str,
        max_duration_seconds: Optional[int] = None,
        max_silence_seconds: Optional[int] = None,
        if_exists: Optional[str] = None,
        beep: Optional[bool] = None,
        terminate_on: Optional[str] = None,
    ) -> LiveRecording:
        """
        Start a recording of the mixed audio from all channels in the bridge.

        Raises:
            InvalidParameterError: invalid parameters
            NotFoundError: bridge not found
            ConflictError: bridge is not in a Stasis application, or a recording with the same name already exists
            UnprocessableEntityError: the format specified is unknown on this system
        """
        return await self.client.bridges().record(
            self.id, name, format, max_duration_seconds, max_silence_seconds, if_exists, beep, terminate_on
        )
