import struct
from typing import Any

from keyserde.core.ports.serializer import Serializer


class BincodeSerializer(Serializer):
    """
    Bincode layout for a struct whose fields are all byte strings.

        struct = field_0 || field_1 || ... || field_n
        field  = len(value:u64 little-endian) || value

    Field names are not on the wire, so decoding needs them in
    declaration order.
    """
    LEN_FORMAT: str = "<Q"
    LEN_SIZE: int = struct.calcsize(LEN_FORMAT)

    def __init__(self, fields: tuple[str, ...]) -> None:
        self._fields = fields

    def serialize(self, message: Any) -> bytes:
        out = bytearray()
        for name in self._fields:
            value = message[name]
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError(f"bincode field '{name}' must be bytes, got {type(value).__name__}")
            out += struct.pack(self.LEN_FORMAT, len(value))
            out += value
        return bytes(out)

    def deserialize(self, data: bytes) -> Any:
        result: dict[str, bytes] = {}
        pos = 0

        for name in self._fields:
            if len(data) < pos + self.LEN_SIZE:
                raise ValueError(f"bincode: truncated length prefix for '{name}'")
            (size,) = struct.unpack_from(self.LEN_FORMAT, data, pos)
            pos += self.LEN_SIZE

            if len(data) < pos + size:
                raise ValueError(f"bincode: truncated value for '{name}'")
            result[name] = bytes(data[pos: pos + size])
            pos += size

        if pos != len(data):
            raise ValueError(f"bincode: {len(data) - pos} trailing byte(s)")

        return result
