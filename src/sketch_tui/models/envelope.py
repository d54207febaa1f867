"""
Message envelope — the type-erased carrier fed into Model.update().

Any frozen ``Message`` subclass can ride in a ``Msg``. Consumers add their own
message kinds by subclassing ``Message``; the runtime never needs to know them.
"""

from typing import Optional, TypeVar

from pydantic import BaseModel, ConfigDict

M = TypeVar("M", bound="Message")


class Message(BaseModel):
    """Marker base for everything that can be carried by a ``Msg``.

    Messages are frozen so they can be handed from the event thread to the
    run loop without anyone mutating them afterwards.
    """

    model_config = ConfigDict(frozen=True)


class Msg:
    __slots__ = ("_payload",)

    def __init__(self, payload: Message):
        if not isinstance(payload, Message):
            raise TypeError(f"Msg payload must be a Message, got {type(payload).__name__}")
        object.__setattr__(self, "_payload", payload)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Msg is immutable")

    @classmethod
    def wrap(cls, value: "Optional[Msg | Message]") -> "Optional[Msg]":
        """Accept a Msg, a bare Message or None and return a Msg (or None)."""
        if value is None or isinstance(value, Msg):
            return value
        return cls(value)

    @property
    def payload(self) -> Message:
        return self._payload

    @property
    def payload_type(self) -> type:
        return type(self._payload)

    def cast(self, kind: type[M]) -> Optional[M]:
        """Return the payload if it is exactly of type ``kind``, else None."""
        if type(self._payload) is kind:
            return self._payload  # type: ignore[return-value]
        return None

    def is_(self, kind: type[Message]) -> bool:
        """Check whether the payload is exactly of type ``kind``."""
        return type(self._payload) is kind

    def __repr__(self) -> str:
        return f"Msg({self._payload!r})"
