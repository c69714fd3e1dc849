import json
import tomllib
from typing import Any

import json5
import tomli_w
import yaml

from keyserde.core.ports.serializer import Serializer


class JsonSerializer(Serializer):
    def serialize(self, message: Any) -> bytes:
        return json.dumps(message, separators=(",", ":")).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return json.loads(data)


class YamlSerializer(Serializer):
    def serialize(self, message: Any) -> bytes:
        return yaml.safe_dump(message, sort_keys=False).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return yaml.safe_load(data)


class TomlSerializer(Serializer):
    """
    TOML has no writer in the standard library: tomllib reads,
    tomli-w writes.
    """
    def serialize(self, message: Any) -> bytes:
        return tomli_w.dumps(message).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return tomllib.loads(data.decode("utf-8"))


class Json5Serializer(Serializer):
    def serialize(self, message: Any) -> bytes:
        return json5.dumps(message).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return json5.loads(data.decode("utf-8"))
