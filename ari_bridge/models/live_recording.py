from pydantic import Field
from typing import Optional
from enum import Enum
from .resource import Resource


class RecordingState(str, Enum):
    QUEUED = "queued"
    RECORDING = "recording"
    PAUSED = "paused"
    DONE = "done"
    FAILED = "failed"
    CANCELED = "canceled"


class LiveRecording(Resource):
    name: str = Field(..., description="Base name for the recording")
    format: str = Field(..., description="Recording format (wav, gsm, etc.)")
    target_uri: str = Field(..., description="URI for the channel or bridge being recorded")
    state: RecordingState | str = Field(..., description="Current state of the recording")
    duration: Optional[int] = Field(default=None, description="Duration in seconds of the recording")
    talking_duration: Optional[int] = Field(default=None, description="Duration of talking, in seconds, detected in the recording")
    silence_duration: Optional[int] = Field(default=None, description="Duration of silence, in seconds, detected in the recording")
    cause: Optional[str] = Field(default=None, description="Cause for recording failure if failed")

    @property
    def resource_id(self) -> str:
        # live recordings are addressed by name
        return self.name
