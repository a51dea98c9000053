from pydantic import Field
from typing import Optional
from enum import Enum
from .resource import Resource


class PlaybackState(str, Enum):
    QUEUED = "queued"
    PLAYING = "playing"
    CONTINUING = "continuing"
    DONE = "done"
    FAILED = "failed"


class Playback(Resource):
    id: str = Field(..., description="ID for this playback operation")
    media_uri: str = Field(..., description="The URI for the media currently being played back")
    next_media_uri: Optional[str] = Field(default=None, description="If a list of URIs is being played, the next media URI to be played back")
    target_uri: str = Field(..., description="URI for the channel or bridge to play the media on")
    language: Optional[str] = Field(default=None, description="For media types that support multiple languages, the language requested for playback")
    state: PlaybackState | str = Field(..., description="Current state of the playback operation")
