from pydantic import BaseModel, Field, field_validator
from typing import Optional
from .bridge import Bridge
from .event_type import EventType
from datetime import datetime
import re


class Event(BaseModel):
    type: EventType | str = Field(..., description="The type of the event")


class BridgeEvent(Event):
    timestamp: Optional[str | datetime] = Field(default=None, description="Event timestamp")
    application: str = Field(..., description="Application name")
    asterisk_id: Optional[str] = Field(default=None, description="Asterisk ID")
    bridge: Bridge = Field(..., description="Bridge the event refers to")

    @field_validator("timestamp", mode="after")
    @classmethod
    def validate_timestamp(cls, v: Optional[str | datetime]) -> Optional[datetime]:
        if isinstance(v, str):
            # Handle timezone offset without colon (e.g., +0300 -> +03:00)
            v = re.sub(r'([+-])(\d{2})(\d{2})$', r'\1\2:\3', v)
            return datetime.fromisoformat(v)
        return v

    def bridges(self) -> list[Bridge]:
        return [self.bridge]


class BridgeCreatedEvent(BridgeEvent):
    type: EventType = Field(default=EventType.BRIDGE_CREATED, description="Event type")


class BridgeDestroyedEvent(BridgeEvent):
    type: EventType = Field(default=EventType.BRIDGE_DESTROYED, description="Event type")


class BridgeMergedEvent(BridgeEvent):
    type: EventType = Field(default=EventType.BRIDGE_MERGED, description="Event type")
    bridge_from: Bridge = Field(..., description="Bridge that was merged into the surviving bridge")

    def bridges(self) -> list[Bridge]:
        return [self.bridge, self.bridge_from]


BRIDGE_EVENTS: dict[str, type[BridgeEvent]] = {
    EventType.BRIDGE_CREATED.value: BridgeCreatedEvent,
    EventType.BRIDGE_DESTROYED.value: BridgeDestroyedEvent,
    EventType.BRIDGE_MERGED.value: BridgeMergedEvent,
}
