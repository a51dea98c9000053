from enum import Enum


class EventType(str, Enum):
    BRIDGE_CREATED = "BridgeCreated"
    BRIDGE_DESTROYED = "BridgeDestroyed"
    BRIDGE_MERGED = "BridgeMerged"
