import asyncio
import inspect
import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Union[Awaitable[None], None]]


def event_key(event_kind: Union[str, Enum], resource_id: str) -> str:
    """Build the bus key for an event scoped to one resource, e.g. ``BridgeDestroyed_b1``"""
    kind = event_kind.value if isinstance(event_kind, Enum) else event_kind
    return f"{kind}_{resource_id}"


class Subscription:
    def __init__(self, bus: "EventBus", key: str, handler: Handler, once: bool = False):
        self.bus = bus
        self.key = key
        self.handler = handler
        self.once = once
        self.active = True

    def cancel(self):
        if not self.active:
            return
        self.active = False
        self.bus._remove(self)

    def __repr__(self) -> str:
        return f"Subscription(key={self.key!r}, once={self.once}, active={self.active})"


class EventBus:
    """
    Registry of event callbacks keyed by string.

    Resources subscribe under ``<EventKind>_<resourceId>`` keys; the client's
    event listener emits under the same keys. Handlers may be plain callables
    or coroutine functions.
    """

    def __init__(self):
        self._subscriptions: dict[str, list[Subscription]] = defaultdict(list)

    def subscribe(
        self,
        event_kind: Union[str, Enum],
        resource_id: str,
        handler: Handler,
        once: bool = False,
    ) -> Subscription:
        return self._add(event_key(event_kind, resource_id), handler, once)

    def on(self, key: str, handler: Handler) -> Subscription:
        return self._add(key, handler, once=False)

    def once(self, key: str, handler: Handler) -> Subscription:
        return self._add(key, handler, once=True)

    def subscriptions(self, key: str) -> list[Subscription]:
        return list(self._subscriptions.get(key, []))

    def emit(self, key: str, event: Any) -> list[asyncio.Task]:
        """
        Deliver ``event`` to every live subscription for ``key``.

        Coroutine handlers are scheduled on the running loop and the created
        tasks are returned. "once" subscriptions are cancelled before their
        handler is invoked.
        """
        tasks: list[asyncio.Task] = []
        for subscription in self.subscriptions(key):
            if not subscription.active:
                continue
            if subscription.once:
                subscription.cancel()
            try:
                result = subscription.handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {key}: {e}", exc_info=True)
                continue
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                task.add_done_callback(self._handle_task_exception)
                tasks.append(task)
        return tasks

    def clear(self, key: Optional[str] = None):
        if key is None:
            subscriptions = [s for subs in self._subscriptions.values() for s in subs]
        else:
            subscriptions = self.subscriptions(key)
        for subscription in subscriptions:
            subscription.cancel()

    def _add(self, key: str, handler: Handler, once: bool) -> Subscription:
        subscription = Subscription(self, key, handler, once=once)
        self._subscriptions[key].append(subscription)
        logger.debug(f"Subscribed to {key} (once={once})")
        return subscription

    def _remove(self, subscription: Subscription):
        subscriptions = self._subscriptions.get(subscription.key)
        if not subscriptions:
            return
        if subscription in subscriptions:
            subscriptions.remove(subscription)
        if not subscriptions:
            del self._subscriptions[subscription.key]

    def _handle_task_exception(self, task: asyncio.Task):
        """Handle exceptions in event handler tasks"""
        if task.cancelled():
            return
        try:
            task.result()
        except Exception as e:
            logger.error(f"Error in event handler: {e}", exc_info=True)
