import pytest

from keyserde.infra.bincode_serializer import BincodeSerializer


@pytest.fixture
def bincode():
    return BincodeSerializer(("a", "b"))


@pytest.mark.ut
def test_layout_is_u64_le_length_then_bytes(bincode):
    out = bincode.serialize({"a": b"\x01\x02", "b": b""})

    assert out == (
        b"\x02\x00\x00\x00\x00\x00\x00\x00" + b"\x01\x02"
        + b"\x00\x00\x00\x00\x00\x00\x00\x00"
    )


@pytest.mark.ut
def test_field_order_comes_from_declaration(bincode):
    # message order must not matter, the declared order does
    out = bincode.serialize({"b": b"\x0b", "a": b"\x0a"})
    assert out.index(b"\x0a") < out.index(b"\x0b")


@pytest.mark.ut
def test_decode(bincode):
    data = b"\x01" + b"\x00" * 7 + b"\xaa" + b"\x02" + b"\x00" * 7 + b"\xbb\xcc"
    assert bincode.deserialize(data) == {"a": b"\xaa", "b": b"\xbb\xcc"}


@pytest.mark.ut
def test_rejects_non_bytes(bincode):
    with pytest.raises(TypeError, match="'a' must be bytes"):
        bincode.serialize({"a": "text", "b": b""})


@pytest.mark.ut
@pytest.mark.parametrize(
    "data,reason",
    [
        (b"", "truncated length prefix for 'a'"),
        (b"\x05" + b"\x00" * 7 + b"\x01", "truncated value for 'a'"),
        (b"\x00" * 8 + b"\x00" * 3, "truncated length prefix for 'b'"),
    ],
)
def test_rejects_truncated_input(bincode, data, reason):
    with pytest.raises(ValueError, match=reason):
        bincode.deserialize(data)


@pytest.mark.ut
def test_rejects_trailing_bytes(bincode):
    with pytest.raises(ValueError, match="2 trailing byte"):
        bincode.deserialize(b"\x00" * 16 + b"\xde\xad")
