import asyncio
import websockets
from .models.events import Event, BridgeEvent, BRIDGE_EVENTS
from .controller import BridgesController
from .event_bus import EventBus, event_key
import logging
from typing import Optional
from httpx import AsyncClient

logger = logging.getLogger(__name__)


class AriClient:
    def __init__(
        self,
        host: str,
        port: int,
        ari_user: str,
        ari_password: str,
        tls_enabled: bool = False,
        timeout: float = 10,
    ):
        self.host = host
        self.port = port
        self.ari_user = ari_user
        self.ari_password = ari_password
        self.tls_enabled = tls_enabled
        self.timeout = timeout

        # internal variables
        self.http = None
        self.controller = None
        self.app = None
        self.ws = None
        self.event_listener = None

        # resources subscribe here before or after connect
        self.events = EventBus()

    @property
    def base_url(self) -> str:
        return f"{'https' if self.tls_enabled else 'http'}://{self.host}:{self.port}/ari"

    def events_url(self, subscribe_to_all: bool = False) -> str:
        return (
            f"{'wss' if self.tls_enabled else 'ws'}://{self.host}:{self.port}/ari/events"
            f"?api_key={self.ari_user}:{self.ari_password}&app={self.app}&subscribeAll={str(subscribe_to_all).lower()}"
        )

    def bridges(self) -> BridgesController:
        if self.controller is None:
            raise ValueError("Not connected to Asterisk")
        return self.controller

    async def connect(self, app: str, subscribe_to_all: bool = False):
        self.app = app
        self.http = AsyncClient(
            base_url=self.base_url,
            auth=(self.ari_user, self.ari_password),
            timeout=self.timeout
        )
        self.controller = BridgesController(self.http, self)

        self.ws = await websockets.connect(self.events_url(subscribe_to_all))
        self.event_listener = asyncio.create_task(self.__listen_events())
        logger.info(f"Connected to Asterisk at {self.base_url} as app {app}")

    def dispatch(self, message: str) -> Optional[BridgeEvent]:
        """Decode one event message and emit it on the bus under each bridge it refers to"""
        event = Event.model_validate_json(message)
        event_type = getattr(event.type, "value", event.type)
        event_schema = BRIDGE_EVENTS.get(event_type)
        if event_schema is None:
            logger.debug(f"Received unhandled event: {event_type}")
            return None
        bridge_event = event_schema.model_validate_json(message)
        for bridge in bridge_event.bridges():
            bridge.bind(self)
        for bridge in bridge_event.bridges():
            self.events.emit(event_key(event_type, bridge.id), bridge_event)
        return bridge_event

    async def __listen_events(self):
        try:
            while True:
                try:
                    message = await self.ws.recv()
                    self.dispatch(message)
                except websockets.exceptions.WebSocketException:
                    raise
                except Exception as e:
                    # Log but continue processing events
                    logger.error(f"Error processing event: {e}", exc_info=True)
                    continue
        except websockets.exceptions.WebSocketException as e:
            logger.error(f"WebSocket exception: {e}")
            raise e
        except asyncio.CancelledError:
            logger.info("Event listener cancelled")
            raise
        except Exception as e:
            logger.error(f"Unexpected error in event listener: {e}", exc_info=True)
            raise e

    async def disconnect(self):
        if self.event_listener:
            self.event_listener.cancel()
        if self.ws:
            await self.ws.close()
        if self.http:
            await self.http.aclose()
