from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from keyserde.core.keys import check_consistency
from keyserde.core.models.keyset import KeyMaterial, KeyMaterialError
from keyserde.core.ports.serializer import Serializer


class FixtureError(Exception):
    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"[{name}] {message}")
        self.name = name


class FixtureMissingError(FixtureError):
    pass


class FixtureDecodeError(FixtureError):
    pass


class FixtureEncodeError(FixtureError):
    pass


class FixtureMismatchError(FixtureError):
    """
    ``kind`` tells which direction failed:
    - "value": the decoded fixture differs from the original key material
    - "bytes": re-encoding the original differs from the stored fixture
    """
    def __init__(self, name: str, kind: str, message: str) -> None:
        super().__init__(name, message)
        self.kind = kind


class UnknownFormatError(KeyError):
    pass


@dataclass(frozen=True)
class FixtureFormat:
    """One entry of the format catalogue: a named codec bound to a wire shape."""
    name: str
    serializer: Serializer
    human_readable: bool

    def encode(self, material: KeyMaterial) -> bytes:
        try:
            return self.serializer.serialize(material.to_dict(self.human_readable))
        except Exception as ex:
            raise FixtureEncodeError(self.name, f"codec cannot encode key material: {ex}") from ex

    def decode(self, data: bytes) -> KeyMaterial:
        try:
            raw = self.serializer.deserialize(data)
        except Exception as ex:
            raise FixtureDecodeError(self.name, f"codec rejected fixture: {ex}") from ex

        try:
            return KeyMaterial.from_dict(raw, self.human_readable)
        except KeyMaterialError as ex:
            raise FixtureDecodeError(self.name, f"unexpected shape: {ex}") from ex


def select_formats(
    formats: Sequence[FixtureFormat],
    names: Iterable[str] | None
) -> tuple[FixtureFormat, ...]:
    """Keep the formats named in ``names`` in catalogue order; all of them if empty."""
    wanted = set(names or ())
    if not wanted:
        return tuple(formats)

    known = {fmt.name for fmt in formats}
    unknown = sorted(wanted - known)
    if unknown:
        raise UnknownFormatError(
            f"Unknown format(s): {', '.join(unknown)}. "
            f"Known formats: {', '.join(fmt.name for fmt in formats)}"
        )

    return tuple(fmt for fmt in formats if fmt.name in wanted)


class FixtureStore:
    """Flat directory of fixture files, one per format, named after it."""

    def __init__(self, directory: Path | str) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path(self, name: str) -> Path:
        return self._directory / name

    def read(self, name: str) -> bytes:
        file = self.path(name)
        try:
            return file.read_bytes()
        except FileNotFoundError as ex:
            raise FixtureMissingError(name, f"fixture not found: {file}") from ex

    def write(self, name: str, data: bytes) -> Path:
        self._directory.mkdir(parents=True, exist_ok=True)
        file = self.path(name)
        file.write_bytes(data)
        return file


class FixtureRunner:
    def __init__(
        self,
        store: FixtureStore,
        formats: Sequence[FixtureFormat],
        consistency: bool = True
    ) -> None:
        self._store = store
        self._formats = tuple(formats)
        self._consistency = consistency
        self._logger = logging.getLogger("core.fixtures")

    @property
    def formats(self) -> tuple[FixtureFormat, ...]:
        return self._formats

    def verify(self, fmt: FixtureFormat, original: KeyMaterial) -> None:
        """
        Check one fixture in both directions:
        stored bytes -> value must equal the original,
        original -> bytes must equal the stored bytes.
        """
        stored = self._store.read(fmt.name)

        restored = fmt.decode(stored)
        self._logger.debug(f"{fmt.name}: decoded {len(stored)} bytes")
        if restored != original:
            raise FixtureMismatchError(
                fmt.name,
                "value",
                f"decoded value differs from original: {restored!r} != {original!r}"
            )

        if self._consistency:
            try:
                check_consistency(restored)
            except KeyMaterialError as ex:
                raise FixtureMismatchError(fmt.name, "value", str(ex)) from ex

        reserialized = fmt.encode(original)
        self._logger.debug(f"{fmt.name}: re-encoded {len(reserialized)} bytes")
        if reserialized != stored:
            raise FixtureMismatchError(
                fmt.name,
                "bytes",
                f"re-encoding differs from fixture "
                f"({len(reserialized)} bytes vs {len(stored)} stored)"
            )

    def verify_all(self, original: KeyMaterial) -> list[str]:
        verified = []
        for fmt in self._formats:
            self.verify(fmt, original)
            self._logger.info(f"{fmt.name}: OK")
            verified.append(fmt.name)
        return verified

    def serialize(self, fmt: FixtureFormat, original: KeyMaterial) -> Path:
        data = fmt.encode(original)
        file = self._store.write(fmt.name, data)
        self._logger.info(f"{fmt.name}: wrote {len(data)} bytes to {file}")
        return file

    def serialize_all(self, original: KeyMaterial) -> list[Path]:
        return [self.serialize(fmt, original) for fmt in self._formats]
