import asyncio
import sys
from ari_bridge import AriClient, BridgeDestroyedEvent, NotFoundError
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

client = AriClient(
    host="localhost",
    port=8088,
    ari_user="user",
    ari_password="user",
    tls_enabled=False
)


async def on_bridge_destroyed(event: BridgeDestroyedEvent):
    logger.info(f"Bridge destroyed: {event.bridge.id}")


async def main(channel_ids: list[str]):

    await client.connect(app="assistant2", subscribe_to_all=True)

    bridge = await client.bridges().create_bridge(type="mixing", name="conference")
    logger.info(f"Created bridge: {bridge.id}")
    bridge.once_bridge_destroyed(on_bridge_destroyed)

    # All actions are done via the bridge object
    if channel_ids:
        await bridge.add_channel(channel_ids)
    await bridge.start_music_on_hold()
    await asyncio.sleep(5)
    await bridge.stop_music_on_hold()

    playback = await bridge.play_media("sound:hello-world")
    logger.info(f"Playback {playback.id} is {playback.state}")
    recording = await bridge.record(name="conference", format="wav", max_duration_seconds=30, if_exists="overwrite")
    logger.info(f"Recording {recording.name} is {recording.state}")

    # Keep running until interrupted
    try:
        await asyncio.sleep(30)
    except KeyboardInterrupt:
        pass
    finally:
        try:
            await bridge.delete_bridge()
        except NotFoundError:
            logger.warning(f"Bridge already gone: {bridge.id}")
        await asyncio.sleep(1)
        await client.disconnect()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
