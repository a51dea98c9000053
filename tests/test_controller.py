"""
Tests for the bridges() controller.

Requests are served by an httpx.MockTransport so no Asterisk instance is needed.
"""
import json
import pytest
from unittest.mock import MagicMock
import httpx
from httpx import AsyncClient
from ari_bridge import (
    AriError,
    Bridge,
    BridgesController,
    ConflictError,
    InvalidParameterError,
    LiveRecording,
    NotFoundError,
    Playback,
    PlaybackState,
    UnprocessableEntityError,
)


BRIDGE = {
    "id": "b1",
    "technology": "simple_bridge",
    "bridge_type": "mixing",
    "bridge_class": "stasis",
    "creator": "Stasis",
    "name": "conference",
    "channels": [],
    "creationtime": "2024-01-01T12:00:00+00:00"
}

PLAYBACK = {
    "id": "pb-1",
    "media_uri": "sound:hello",
    "target_uri": "bridge:b1",
    "language": "en",
    "state": "queued"
}

RECORDING = {
    "name": "conf",
    "format": "wav",
    "target_uri": "bridge:b1",
    "state": "queued"
}


class Recorder:
    """Collects requests and answers them with a fixed response"""

    def __init__(self, status_code: int, body=None):
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def request(self) -> httpx.Request:
        assert len(self.requests) == 1
        return self.requests[0]

    @property
    def payload(self) -> dict:
        return json.loads(self.request.content)


@pytest.fixture
def ari():
    return MagicMock()


def make_controller(recorder: Recorder, ari) -> BridgesController:
    client = AsyncClient(base_url="http://localhost:8088/ari", transport=httpx.MockTransport(recorder))
    return BridgesController(client, ari)


class TestBridgesController:

    @pytest.mark.asyncio
    async def test_list_bridges(self, ari):
        recorder = Recorder(200, [BRIDGE, dict(BRIDGE, id="b2")])
        controller = make_controller(recorder, ari)

        bridges = await controller.list_bridges()

        assert recorder.request.method == "GET"
        assert recorder.request.url.path == "/ari/bridges"
        assert [b.id for b in bridges] == ["b1", "b2"]
        assert all(b.client is ari for b in bridges)

    @pytest.mark.asyncio
    async def test_get_bridge(self, ari):
        recorder = Recorder(200, dict(BRIDGE, channels=["chan-1"]))
        controller = make_controller(recorder, ari)

        bridge = await controller.get_bridge("b1")

        assert recorder.request.url.path == "/ari/bridges/b1"
        assert isinstance(bridge, Bridge)
        assert bridge.channels == ("chan-1",)

    @pytest.mark.asyncio
    async def test_create_bridge(self, ari):
        recorder = Recorder(200, BRIDGE)
        controller = make_controller(recorder, ari)

        bridge = await controller.create_bridge(type="mixing", name="conference")

        assert recorder.request.method == "POST"
        assert recorder.payload == {"type": "mixing", "name": "conference"}
        assert bridge.id == "b1"

    @pytest.mark.asyncio
    async def test_delete_bridge(self, ari):
        recorder = Recorder(204)
        controller = make_controller(recorder, ari)

        assert await controller.delete_bridge("b1") is None
        assert recorder.request.method == "DELETE"
        assert recorder.request.url.path == "/ari/bridges/b1"

    @pytest.mark.asyncio
    async def test_delete_bridge_not_found(self, ari):
        recorder = Recorder(404, {"message": "Bridge not found"})
        controller = make_controller(recorder, ari)

        with pytest.raises(NotFoundError) as exc_info:
            await controller.delete_bridge("missing")

        assert exc_info.value.status_code == 404
        assert "Bridge not found" in exc_info.value.detail
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_add_channel_with_role(self, ari):
        recorder = Recorder(204)
        controller = make_controller(recorder, ari)

        await controller.add_channel("b1", "chan-1,chan-2", "announcer")

        assert recorder.request.url.path == "/ari/bridges/b1/addChannel"
        assert recorder.payload == {"channel": "chan-1,chan-2", "role": "announcer"}

    @pytest.mark.asyncio
    async def test_add_channel_list_is_joined(self, ari):
        recorder = Recorder(204)
        controller = make_controller(recorder, ari)

        await controller.add_channel("b1", ["chan-1", "chan-2"])

        assert recorder.payload == {"channel": "chan-1,chan-2"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,error_cls", [
        (404, NotFoundError),
        (409, ConflictError),
        (422, UnprocessableEntityError),
    ])
    async def test_add_channel_errors(self, ari, status_code, error_cls):
        controller = make_controller(Recorder(status_code), ari)

        with pytest.raises(error_cls, match="Failed to add channel to bridge"):
            await controller.add_channel("b1", "chan-1")

    @pytest.mark.asyncio
    async def test_remove_channel(self, ari):
        recorder = Recorder(204)
        controller = make_controller(recorder, ari)

        await controller.remove_channel("b1", "chan-1")

        assert recorder.request.url.path == "/ari/bridges/b1/removeChannel"
        assert recorder.payload == {"channel": "chan-1"}

    @pytest.mark.asyncio
    async def test_start_music_on_hold(self, ari):
        recorder = Recorder(204)
        controller = make_controller(recorder, ari)

        await controller.start_music_on_hold("b1", "default")

        assert recorder.request.url.path == "/ari/bridges/b1/moh"
        assert recorder.payload == {"mohClass": "default"}

    @pytest.mark.asyncio
    async def test_stop_music_on_hold_conflict(self, ari):
        recorder = Recorder(409)
        controller = make_controller(recorder, ari)

        with pytest.raises(ConflictError):
            await controller.stop_music_on_hold("b1")

        assert recorder.request.method == "DELETE"
        assert recorder.request.url.path == "/ari/bridges/b1/moh"

    @pytest.mark.asyncio
    async def test_play_media(self, ari):
        recorder = Recorder(201, PLAYBACK)
        controller = make_controller(recorder, ari)

        playback = await controller.play_media("b1", "sound:hello", "en", None, 3000, None)

        assert recorder.request.url.path == "/ari/bridges/b1/play"
        assert recorder.payload == {"media": "sound:hello", "lang": "en", "skipms": 3000}
        assert isinstance(playback, Playback)
        assert playback.state == PlaybackState.QUEUED
        assert playback.client is ari

    @pytest.mark.asyncio
    async def test_play_media_with_id(self, ari):
        recorder = Recorder(201, PLAYBACK)
        controller = make_controller(recorder, ari)

        playback = await controller.play_media_with_id("b1", "sound:hello", playback_id="pb-1")

        assert recorder.request.url.path == "/ari/bridges/b1/play/pb-1"
        assert recorder.payload == {"media": "sound:hello"}
        assert playback.id == "pb-1"

    @pytest.mark.asyncio
    async def test_play_media_with_id_requires_playback_id(self, ari):
        recorder = Recorder(201, PLAYBACK)
        controller = make_controller(recorder, ari)

        with pytest.raises(InvalidParameterError):
            await controller.play_media_with_id("b1", "sound:hello")

        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_record(self, ari):
        recorder = Recorder(201, RECORDING)
        controller = make_controller(recorder, ari)

        recording = await controller.record("b1", "conf", "wav", 60, 0, "overwrite", False, "#")

        assert recorder.request.url.path == "/ari/bridges/b1/record"
        assert recorder.payload == {
            "name": "conf",
            "format": "wav",
            "maxDurationSeconds": 60,
            "maxSilenceSeconds": 0,
            "ifExists": "overwrite",
            "beep": False,
            "terminateOn": "#",
        }
        assert isinstance(recording, LiveRecording)
        assert recording.resource_id == "conf"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,error_cls", [
        (400, InvalidParameterError),
        (404, NotFoundError),
        (409, ConflictError),
        (422, UnprocessableEntityError),
    ])
    async def test_record_errors(self, ari, status_code, error_cls):
        controller = make_controller(Recorder(status_code), ari)

        with pytest.raises(error_cls, match="Failed to record bridge"):
            await controller.record("b1", "conf", "wav")

    @pytest.mark.asyncio
    async def test_unexpected_status_raises_base_error(self, ari):
        controller = make_controller(Recorder(500), ari)

        with pytest.raises(AriError) as exc_info:
            await controller.delete_bridge("b1")

        assert type(exc_info.value) is AriError
        assert exc_info.value.status_code == 500
