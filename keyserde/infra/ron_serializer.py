import re
from typing import Any

from keyserde.core.ports.serializer import Serializer


class RonSerializer(Serializer):
    """
    Rusty Object Notation for an anonymous struct of string fields:

        (seckey:"0102...",pubkey:"02ab...")

    Output is compact. Input may contain whitespace and a trailing comma;
    strings understand the \\" and \\\\ escapes only.
    """
    _FIELD = re.compile(
        r'\s*(?P<name>[A-Za-z_][A-Za-z0-9_]*)\s*:\s*"(?P<value>(?:[^"\\]|\\["\\])*)"\s*'
    )
    _UNESCAPE = re.compile(r'\\(["\\])')

    def serialize(self, message: Any) -> bytes:
        parts = []
        for name, value in message.items():
            if not isinstance(value, str):
                raise TypeError(f"ron field '{name}' must be str, got {type(value).__name__}")
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            parts.append(f'{name}:"{escaped}"')
        return f"({','.join(parts)})".encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        text = data.decode("utf-8").strip()
        if not (text.startswith("(") and text.endswith(")")):
            raise ValueError("ron: expected a parenthesised struct")

        body = text[1:-1]
        result: dict[str, str] = {}
        pos = 0

        while body[pos:].strip():
            match = self._FIELD.match(body, pos)
            if match is None:
                raise ValueError(f"ron: unexpected input at offset {pos + 1}")

            name = match.group("name")
            if name in result:
                raise ValueError(f"ron: duplicate field '{name}'")
            result[name] = self._UNESCAPE.sub(r"\1", match.group("value"))
            pos = match.end()

            if pos < len(body):
                if body[pos] != ",":
                    raise ValueError(f"ron: expected ',' at offset {pos + 1}")
                pos += 1

        return result
