import json
from typing import Any


class DriftingSerializer:
    """Decodes like JSON but never encodes the same way twice."""

    def __init__(self) -> None:
        self.calls = 0

    def serialize(self, message: Any) -> bytes:
        self.calls += 1
        return json.dumps(message, indent=self.calls).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return json.loads(data)


class BrokenSerializer:
    def serialize(self, message: Any) -> bytes:
        return b"broken"

    def deserialize(self, data: bytes) -> Any:
        raise ValueError("cannot decode anything")
