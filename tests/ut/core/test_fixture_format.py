import pytest

from keyserde.core.fixtures import (
    FixtureDecodeError,
    FixtureEncodeError,
    FixtureError,
    FixtureFormat,
    FixtureMismatchError,
    FixtureMissingError,
    FixtureStore,
    UnknownFormatError,
    select_formats,
)
from keyserde.core.models.keyset import KeyMaterial
from keyserde.infra.bincode_serializer import BincodeSerializer
from keyserde.infra.text_serializers import JsonSerializer
from tests.fake.fake_serializer import BrokenSerializer


@pytest.mark.ut
def test_select_formats_empty_means_all(formats):
    assert select_formats(formats, []) == formats
    assert select_formats(formats, None) == formats


@pytest.mark.ut
def test_select_formats_keeps_catalogue_order(formats):
    selected = select_formats(formats, ["bson", "json", "cbor"])
    assert [fmt.name for fmt in selected] == ["json", "cbor", "bson"]


@pytest.mark.ut
def test_select_formats_rejects_unknown_names(formats):
    with pytest.raises(UnknownFormatError, match="xml"):
        select_formats(formats, ["json", "xml"])


@pytest.mark.ut
def test_encode_uses_the_format_shape(key_material):
    fmt = FixtureFormat("json", JsonSerializer(), human_readable=True)
    assert key_material.pubkey.hex().encode() in fmt.encode(key_material)


@pytest.mark.ut
def test_decode_wraps_codec_errors():
    fmt = FixtureFormat("broken", BrokenSerializer(), human_readable=True)

    with pytest.raises(FixtureDecodeError, match=r"\[broken\] codec rejected") as info:
        fmt.decode(b"anything")

    assert info.value.name == "broken"
    assert isinstance(info.value.__cause__, ValueError)


@pytest.mark.ut
def test_decode_wraps_shape_errors():
    fmt = FixtureFormat("json", JsonSerializer(), human_readable=True)

    with pytest.raises(FixtureDecodeError, match="unexpected shape"):
        fmt.decode(b'{"seckey": "01"}')


@pytest.mark.ut
def test_store_read_missing(tmp_path):
    store = FixtureStore(tmp_path / "nowhere")

    with pytest.raises(FixtureMissingError, match="fixture not found") as info:
        store.read("json")
    assert info.value.name == "json"


@pytest.mark.ut
def test_store_write_creates_directory(tmp_path):
    store = FixtureStore(tmp_path / "a" / "b")

    path = store.write("json", b"{}")

    assert path == tmp_path / "a" / "b" / "json"
    assert store.read("json") == b"{}"


@pytest.mark.ut
def test_encode_wraps_codec_errors(key_material):
    # bincode only takes bytes, the human-readable shape hands it hex strings
    fmt = FixtureFormat("bincode", BincodeSerializer(KeyMaterial.field_names()), human_readable=True)

    with pytest.raises(FixtureEncodeError, match=r"\[bincode\] codec cannot encode") as info:
        fmt.encode(key_material)

    assert isinstance(info.value, FixtureError)
    assert isinstance(info.value.__cause__, TypeError)


@pytest.mark.ut
def test_mismatch_error_documents_its_kinds():
    error = FixtureMismatchError("json", "bytes", "differs")

    assert error.kind == "bytes"
    assert error.name == "json"
    assert '"value"' in FixtureMismatchError.__doc__
    assert '"bytes"' in FixtureMismatchError.__doc__
