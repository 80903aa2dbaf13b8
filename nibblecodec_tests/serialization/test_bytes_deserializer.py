import pytest

from nibblecodec.serialization import AlreadyFinalizedError, Deserializer, UnexpectedEndError
from nibblecodec.serialization.bytes_deserializer import BytesDeserializer


def test_take_nibbles() -> None:
    de = Deserializer.build_bytes_deserializer(b'\x12\x34')
    assert [de.take_nibble() for _ in range(4)] == [0x1, 0x2, 0x3, 0x4]
    assert de.is_empty()
    with pytest.raises(UnexpectedEndError):
        de.take_nibble()


def test_take_byte_aligned() -> None:
    de = BytesDeserializer(b'\xab\xcd')
    assert de.take_byte() == 0xAB
    assert de.is_at_byte_boundary()
    assert de.take_byte() == 0xCD
    with pytest.raises(UnexpectedEndError):
        de.take_byte()


def test_take_byte_misaligned() -> None:
    de = BytesDeserializer(b'\x1a\xb2')
    assert de.take_nibble() == 0x1
    assert de.take_byte() == 0xAB
    assert not de.is_at_byte_boundary()
    assert de.nibbles_left() == 1
    assert de.take_nibble() == 0x2
    assert de.is_empty()


def test_take_byte_misaligned_at_end_does_not_move() -> None:
    de = BytesDeserializer(b'\x1a')
    assert de.take_nibble() == 0x1
    with pytest.raises(UnexpectedEndError):
        de.take_byte()
    assert de.nibbles_left() == 1
    assert de.take_nibble() == 0xA


def test_nibbles_left_accounting() -> None:
    de = BytesDeserializer(b'\x00\x00\x00')
    assert de.nibbles_left() == 6
    de.take_nibble()
    assert de.nibbles_left() == 5
    de.take_byte()
    assert de.nibbles_left() == 3
    de.take_nibble()
    assert de.nibbles_left() == 2


def test_take_n_aligned_is_zero_copy() -> None:
    data = bytearray(b'hello world')
    de = BytesDeserializer(data)
    view = de.take_n(5)
    assert isinstance(view, memoryview)
    assert bytes(view) == b'hello'
    data[0] = ord('j')
    assert bytes(view) == b'jello'
    assert bytes(de.finalize()) == b' world'


def test_take_n_skips_padding() -> None:
    de = BytesDeserializer(b'\x70abc')
    assert de.take_nibble() == 0x7
    assert bytes(de.take_n(2)) == b'ab'
    assert de.is_at_byte_boundary()
    assert bytes(de.finalize()) == b'c'


@pytest.mark.parametrize('nibbles_before', [0, 1])
def test_take_n_failure_does_not_mutate(nibbles_before: int) -> None:
    de = BytesDeserializer(b'\x12abc')
    taken = [de.take_nibble() for _ in range(nibbles_before)]
    left = de.nibbles_left()
    boundary = de.is_at_byte_boundary()
    with pytest.raises(UnexpectedEndError):
        de.take_n(5)
    assert de.nibbles_left() == left
    assert de.is_at_byte_boundary() == boundary
    # subsequent reads are unaffected
    rest = [de.take_nibble() for _ in range(2 - nibbles_before)]
    assert taken + rest == [0x1, 0x2]
    assert bytes(de.take_n(3)) == b'abc'


def test_take_n_misaligned_exact() -> None:
    de = BytesDeserializer(b'\x10ab')
    de.take_nibble()
    assert bytes(de.take_n(2)) == b'ab'
    assert de.is_empty()


def test_take_n_zero() -> None:
    de = BytesDeserializer(b'')
    assert bytes(de.take_n(0)) == b''
    with pytest.raises(ValueError):
        de.take_n(-1)


def test_finalize_remainder() -> None:
    de = BytesDeserializer(b'\x12\x34\x56')
    de.take_byte()
    assert bytes(de.finalize()) == b'\x34\x56'


def test_finalize_skips_half_read_byte() -> None:
    de = BytesDeserializer(b'\x10trailing')
    de.take_nibble()
    assert bytes(de.finalize()) == b'trailing'


def test_use_after_finalize() -> None:
    de = BytesDeserializer(b'\x00')
    de.finalize()
    with pytest.raises(AlreadyFinalizedError):
        de.take_nibble()
    with pytest.raises(AlreadyFinalizedError):
        de.take_byte()
    with pytest.raises(AlreadyFinalizedError):
        de.take_n(0)
    with pytest.raises(AlreadyFinalizedError):
        de.finalize()
