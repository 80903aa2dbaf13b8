import pytest

from nibblecodec.serialization import Deserializer, Serializer, TooLongError, UnexpectedEndError
from nibblecodec.serialization.encoding.bool import decode_bool, encode_bool
from nibblecodec.serialization.encoding.bytes import decode_bytes, encode_bytes
from nibblecodec.serialization.encoding.int import decode_int, encode_int


def test_bool_round_trip() -> None:
    values = [True, False, False, True, True]
    se = Serializer.build_bytes_serializer()
    for value in values:
        encode_bool(se, value)
    data = se.finalize()
    assert data == b'\x10\x01\x10'
    de = Deserializer.build_bytes_deserializer(data)
    assert [decode_bool(de) for _ in values] == values


def test_bool_invalid_nibble() -> None:
    de = Deserializer.build_bytes_deserializer(b'\xf0')
    with pytest.raises(ValueError):
        decode_bool(de)


@pytest.mark.parametrize('number, length, signed, encoded', [
    (0, 1, False, '00'),
    (255, 1, False, 'ff'),
    (-1, 1, True, 'ff'),
    (0xA5C7, 2, False, 'a5c7'),
    (-32768, 2, True, '8000'),
    (0x12345678, 4, False, '12345678'),
])
def test_int_round_trip_misaligned(number: int, length: int, signed: bool, encoded: str) -> None:
    se = Serializer.build_bytes_serializer()
    se.push_nibble(0x1)
    encode_int(se, number, length=length, signed=signed)
    se.push_nibble(0x2)
    data = se.finalize()
    assert data.hex() == '1' + encoded + '2'
    de = Deserializer.build_bytes_deserializer(data)
    assert de.take_nibble() == 0x1
    assert decode_int(de, length=length, signed=signed) == number
    assert de.take_nibble() == 0x2


def test_int_too_big() -> None:
    se = Serializer.build_bytes_serializer()
    with pytest.raises(ValueError):
        encode_int(se, 256, length=1, signed=False)


def test_int_truncated() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x12')
    with pytest.raises(UnexpectedEndError):
        decode_int(de, length=2, signed=False)


@pytest.mark.parametrize('data', [b'', b'a', b'test', b'x' * 100, bytes(range(256))])
def test_bytes_round_trip(data: bytes) -> None:
    se = Serializer.build_bytes_serializer()
    encode_bytes(se, data)
    encode_bool(se, True)
    encoded = se.finalize()
    de = Deserializer.build_bytes_deserializer(encoded)
    assert decode_bytes(de) == data
    assert decode_bool(de) is True
    assert bytes(de.finalize()) == b''


def test_bytes_empty_layout() -> None:
    se = Serializer.build_bytes_serializer()
    encode_bytes(se, b'')
    assert se.finalize() == b'\x00'


def test_bytes_max_length_from_settings() -> None:
    # the unittests settings set BYTES_MAX_LENGTH to 1024
    se = Serializer.build_bytes_serializer()
    encode_bytes(se, b'x' * 1024)
    with pytest.raises(TooLongError):
        encode_bytes(Serializer.build_bytes_serializer(), b'x' * 1025)


def test_bytes_max_length_explicit() -> None:
    se = Serializer.build_bytes_serializer()
    encode_bytes(se, b'abcd')
    encoded = se.finalize()
    with pytest.raises(TooLongError):
        decode_bytes(Deserializer.build_bytes_deserializer(encoded), max_length=3)
    with pytest.raises(TooLongError):
        encode_bytes(Serializer.build_bytes_serializer(), b'abcd', max_length=3)
    assert decode_bytes(Deserializer.build_bytes_deserializer(encoded), max_length=4) == b'abcd'
