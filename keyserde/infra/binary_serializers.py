import pickle
from typing import Any

import bson
import cbor2
from flatbuffers import flexbuffers

from keyserde.core.ports.serializer import Serializer


class CborSerializer(Serializer):
    def serialize(self, message: Any) -> bytes:
        return cbor2.dumps(message)

    def deserialize(self, data: bytes) -> Any:
        return cbor2.loads(data)


class PickleSerializer(Serializer):
    """
    Pickle with a pinned protocol so the output does not drift with
    the interpreter's default.

    Only load fixtures you wrote yourself: unpickling runs arbitrary code.
    """
    def __init__(self, protocol: int) -> None:
        self._protocol = protocol

    @property
    def protocol(self) -> int:
        return self._protocol

    def serialize(self, message: Any) -> bytes:
        return pickle.dumps(message, protocol=self._protocol)

    def deserialize(self, data: bytes) -> Any:
        return pickle.loads(data)


class FlexBuffersSerializer(Serializer):
    def serialize(self, message: Any) -> bytes:
        return bytes(flexbuffers.Dumps(message))

    def deserialize(self, data: bytes) -> Any:
        return flexbuffers.Loads(data)


class BsonSerializer(Serializer):
    """BSON through the bson package shipped with pymongo."""
    def serialize(self, message: Any) -> bytes:
        return bson.encode(message)

    def deserialize(self, data: bytes) -> Any:
        return bson.decode(data)
