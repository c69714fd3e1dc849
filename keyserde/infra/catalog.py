from keyserde.core.fixtures import FixtureFormat
from keyserde.core.models.keyset import KeyMaterial
from keyserde.infra.bincode_serializer import BincodeSerializer
from keyserde.infra.binary_serializers import (
    BsonSerializer,
    CborSerializer,
    FlexBuffersSerializer,
    PickleSerializer,
)
from keyserde.infra.msgpack_serializer import MsgPackSerializer
from keyserde.infra.ron_serializer import RonSerializer
from keyserde.infra.text_serializers import (
    Json5Serializer,
    JsonSerializer,
    TomlSerializer,
    YamlSerializer,
)


def build_formats() -> tuple[FixtureFormat, ...]:
    """
    The fixed, ordered list of formats every run goes through.

    ``human_readable`` decides the wire shape: hex strings when set,
    raw bytes otherwise. The pickle names keep the ``proto3_<bool>``
    spelling of the existing fixture files: true is protocol 3,
    false is protocol 2.
    """
    return (
        FixtureFormat("json", JsonSerializer(), human_readable=True),
        FixtureFormat("bincode", BincodeSerializer(KeyMaterial.field_names()), human_readable=False),
        FixtureFormat("cbor", CborSerializer(), human_readable=False),
        FixtureFormat("yaml", YamlSerializer(), human_readable=True),
        FixtureFormat("msgpack", MsgPackSerializer(), human_readable=False),
        FixtureFormat("toml", TomlSerializer(), human_readable=True),
        FixtureFormat("pickle_proto3_true", PickleSerializer(protocol=3), human_readable=True),
        FixtureFormat("pickle_proto3_false", PickleSerializer(protocol=2), human_readable=True),
        FixtureFormat("flexbuffers", FlexBuffersSerializer(), human_readable=False),
        FixtureFormat("json5", Json5Serializer(), human_readable=True),
        FixtureFormat("ron", RonSerializer(), human_readable=True),
        FixtureFormat("bson", BsonSerializer(), human_readable=True),
    )
