from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError, model_validator
from typing import Any, Optional, Union, TYPE_CHECKING
from enum import Enum
from ..errors import ResourceDecodeError
from ..event_bus import Handler, Subscription

if TYPE_CHECKING:
    from ..ari_client import AriClient


class Resource(BaseModel):
    """
    Base for server-side entities decoded from ARI responses.

    A resource is a snapshot: fields are set once from the decoded response
    and never updated locally. Actions are forwarded to the shared client the
    resource is bound to.
    """
    model_config = ConfigDict(frozen=True)

    _client: Any = PrivateAttr(default=None)
    _response: Optional[dict] = PrivateAttr(default=None)

    @model_validator(mode="wrap")
    @classmethod
    def keep_response(cls, data: Any, handler):
        resource = handler(data)
        if isinstance(data, dict):
            resource._response = data
        return resource

    @classmethod
    def from_response(cls, client: "AriClient", obj: dict):
        try:
            resource = cls.model_validate(obj)
        except ValidationError as e:
            raise ResourceDecodeError(f"Failed to decode {cls.__name__}: {e}", detail=str(e)) from e
        return resource.bind(client)

    def bind(self, client: "AriClient"):
        """Attach the shared client, e.g. for a resource decoded inside an event"""
        self._client = client
        return self

    @property
    def client(self) -> "AriClient":
        if self._client is None:
            raise ValueError("Client not set")
        return self._client

    @property
    def response(self) -> Optional[dict]:
        return self._response

    @property
    def resource_id(self) -> str:
        return self.id

    def on(self, event_kind: Union[str, Enum], handler: Handler) -> Subscription:
        return self.client.events.subscribe(event_kind, self.resource_id, handler)

    def once(self, event_kind: Union[str, Enum], handler: Handler) -> Subscription:
        return self.client.events.subscribe(event_kind, self.resource_id, handler, once=True)
