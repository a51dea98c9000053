from httpx import AsyncClient
from typing import Optional, Union, List, TYPE_CHECKING
from .models.bridge import Bridge
from .models.playback import Playback
from .models.live_recording import LiveRecording
from .errors import raise_for_status, InvalidParameterError

if TYPE_CHECKING:
    from .ari_client import AriClient


def _join_ids(channel: Union[str, List[str]]) -> str:
    if isinstance(channel, str):
        return channel
    return ",".join(channel)


class BridgesController:
    """Requests against the /bridges resource of ARI"""

    def __init__(self, client: AsyncClient, ari: "AriClient"):
        self.client = client
        self.ari = ari

    async def list_bridges(self) -> list[Bridge]:
        response = await self.client.get("/bridges")
        raise_for_status(response, "list bridges", 200)
        return [Bridge.from_response(self.ari, obj) for obj in response.json()]

    async def get_bridge(self, bridge_id: str) -> Bridge:
        response = await self.client.get(f"/bridges/{bridge_id}")
        raise_for_status(response, "get bridge", 200)
        return Bridge.from_response(self.ari, response.json())

    async def create_bridge(self, type: Optional[str] = None, bridge_id: Optional[str] = None, name: Optional[str] = None) -> Bridge:
        payload = {}
        if type:
            payload["type"] = type
        if bridge_id:
            payload["bridgeId"] = bridge_id
        if name:
            payload["name"] = name
        response = await self.client.post("/bridges", json=payload)
        raise_for_status(response, "create bridge", 200)
        return Bridge.from_response(self.ari, response.json())

    async def delete_bridge(self, bridge_id: str):
        response = await self.client.delete(f"/bridges/{bridge_id}")
        raise_for_status(response, "delete bridge", 204)
        return None

    async def add_channel(self, bridge_id: str, channel: Union[str, List[str]], role: Optional[str] = None):
        payload = {"channel": _join_ids(channel)}
        if role:
            payload["role"] = role
        response = await self.client.post(f"/bridges/{bridge_id}/addChannel", json=payload)
        raise_for_status(response, "add channel to bridge", 204)
        return None

    async def remove_channel(self, bridge_id: str, channel: Union[str, List[str]]):
        response = await self.client.post(f"/bridges/{bridge_id}/removeChannel", json={
            "channel": _join_ids(channel)
        })
        raise_for_status(response, "remove channel from bridge", 204)
        return None

    async def start_music_on_hold(self, bridge_id: str, moh_class: Optional[str] = None):
        payload = {}
        if moh_class:
            payload["mohClass"] = moh_class
        response = await self.client.post(f"/bridges/{bridge_id}/moh", json=payload)
        raise_for_status(response, "start music on hold", 204)
        return None

    async def stop_music_on_hold(self, bridge_id: str):
        response = await self.client.delete(f"/bridges/{bridge_id}/moh")
        raise_for_status(response, "stop music on hold", 204)
        return None

    def _play_payload(
        self,
        media: str,
        lang: Optional[str],
        offsetms: Optional[int],
        skipms: Optional[int],
    ) -> dict:
        payload = {"media": media}
        if lang:
            payload["lang"] = lang
        if offsetms is not None:
            payload["offsetms"] = offsetms
        if skipms is not None:
            payload["skipms"] = skipms
        return payload

    async def play_media(
        self,
        bridge_id: str,
        media: str,
        lang: Optional[str] = None,
        offsetms: Optional[int] = None,
        skipms: Optional[int] = None,
        playback_id: Optional[str] = None,
    ) -> Playback:
        """
        Start playback of media on a bridge (POST /bridges/{bridgeId}/play)

        Args:
            bridge_id: Bridge's id (required)
            media: Media URI to play (required)
            lang: For sounds, selects language for sound
            offsetms: Number of milliseconds to skip before playing
            skipms: Number of milliseconds to skip for forward/reverse operations
            playback_id: Playback id; generated by Asterisk when omitted

        Returns:
            Playback: The playback started on the bridge
        """
        payload = self._play_payload(media, lang, offsetms, skipms)
        if playback_id:
            payload["playbackId"] = playback_id
        response = await self.client.post(f"/bridges/{bridge_id}/play", json=payload)
        raise_for_status(response, "play media on bridge", 201)
        return Playback.from_response(self.ari, response.json())

    async def play_media_with_id(
        self,
        bridge_id: str,
        media: str,
        lang: Optional[str] = None,
        offsetms: Optional[int] = None,
        skipms: Optional[int] = None,
        playback_id: Optional[str] = None,
    ) -> Playback:
        """
        Start playback of media on a bridge with a specific playback ID
        (POST /bridges/{bridgeId}/play/{playbackId})
        """
        if not playback_id:
            raise InvalidParameterError("Failed to play media on bridge: playback_id is required")
        payload = self._play_payload(media, lang, offsetms, skipms)
        response = await self.client.post(f"/bridges/{bridge_id}/play/{playback_id}", json=payload)
        raise_for_status(response, "play media on bridge", 201)
        return Playback.from_response(self.ari, response.json())

    async def record(
        self,
        bridge_id: str,
        name: str,
        format: str,
        max_duration_seconds: Optional[int] = None,
        max_silence_seconds: Optional[int] = None,
        if_exists: Optional[str] = None,
        beep: Optional[bool] = None,
        terminate_on: Optional[str] = None,
    ) -> LiveRecording:
        """
        Start a recording of the mixed audio of a bridge (POST /bridges/{bridgeId}/record)

        Args:
            bridge_id: Bridge's id (required)
            name: Recording's filename (required)
            format: Format to encode audio in (required)
            max_duration_seconds: Maximum duration of the recording, in seconds. 0 for no limit
            max_silence_seconds: Maximum duration of silence, in seconds. 0 for no limit
            if_exists: Action to take if a recording with the same name already exists (fail, overwrite, append)
            beep: Play beep when recording begins
            terminate_on: DTMF input to terminate recording (none, any, *, #)

        Returns:
            LiveRecording: The recording in progress
        """
        payload = {
            "name": name,
            "format": format,
        }
        if max_duration_seconds is not None:
            payload["maxDurationSeconds"] = max_duration_seconds
        if max_silence_seconds is not None:
            payload["maxSilenceSeconds"] = max_silence_seconds
        if if_exists:
            payload["ifExists"] = if_exists
        if beep is not None:
            payload["beep"] = beep
        if terminate_on:
            payload["terminateOn"] = terminate_on
        response = await self.client.post(f"/bridges/{bridge_id}/record", json=payload)
        raise_for_status(response, "record bridge", 201)
        return LiveRecording.from_response(self.ari, response.json())
