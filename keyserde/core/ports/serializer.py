from typing import Protocol, Any


class Serializer(Protocol):
    """
    Defines the interface for encoding/decoding key material
    to and from a fixture file.

    Implementations must be:
    - deterministic (the same input always yields the same bytes)
    - pure (no side effects)
    - loud on malformed input (raise, never guess)
    """

    def serialize(self, message: Any) -> bytes:
        """Encode a mapping of field name to value into fixture bytes."""

    def deserialize(self, data: bytes) -> Any:
        """Decode fixture bytes back into a mapping."""
