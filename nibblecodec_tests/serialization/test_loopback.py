import random
from typing import Callable

import pytest

from nibblecodec.serialization import Deserializer, Serializer
from nibblecodec.serialization.bytes_serializer import BoundedSerializer, BytesSerializer
from nibblecodec.serialization.encoding.vlu32n import decode_vlu32n, encode_vlu32n
from nibblecodec.serialization.size_serializer import SizeSerializer
from nibblecodec.serialization.slice_serializer import SliceSerializer

# an op is (kind, value): kind is one of 'nibble', 'byte', 'extend' or 'vlu32n'
Op = tuple[str, object]


def _gen_ops(rng: random.Random, count: int) -> list[Op]:
    ops: list[Op] = []
    for _ in range(count):
        kind = rng.choice(['nibble', 'byte', 'extend', 'vlu32n'])
        value: object
        if kind == 'nibble':
            value = rng.randrange(16)
        elif kind == 'byte':
            value = rng.randrange(256)
        elif kind == 'extend':
            value = rng.randbytes(rng.randrange(6))
        else:
            value = rng.choice([0, 7, 8, rng.randrange(1 << 32), 0xFFFFFFFF])
        ops.append((kind, value))
    return ops


def _nibbles_of(op: Op, at_boundary: bool) -> int:
    kind, value = op
    if kind == 'nibble':
        return 1
    if kind == 'byte':
        return 2
    if kind == 'extend':
        assert isinstance(value, bytes)
        return 2 * len(value) + (0 if at_boundary else 1)
    from nibblecodec.serialization.encoding.vlu32n import vlu32n_size
    assert isinstance(value, int)
    return vlu32n_size(value)


def _apply(se: Serializer, op: Op) -> None:
    kind, value = op
    if kind == 'nibble':
        se.push_nibble(value)  # type: ignore[arg-type]
    elif kind == 'byte':
        se.push_byte(value)  # type: ignore[arg-type]
    elif kind == 'extend':
        se.extend(value)  # type: ignore[arg-type]
    else:
        encode_vlu32n(se, value)  # type: ignore[arg-type]


def _check(de: Deserializer, op: Op) -> None:
    kind, value = op
    if kind == 'nibble':
        assert de.take_nibble() == value
    elif kind == 'byte':
        assert de.take_byte() == value
    elif kind == 'extend':
        assert isinstance(value, bytes)
        assert bytes(de.take_n(len(value))) == value
    else:
        assert decode_vlu32n(de) == value


BUILDERS: list[Callable[[], Serializer]] = [
    BytesSerializer,
    lambda: BoundedSerializer(1024),
    lambda: SliceSerializer(bytearray(1024)),
]


@pytest.mark.parametrize('seed', range(20))
@pytest.mark.parametrize('build', BUILDERS)
def test_round_trip_and_parity(seed: int, build: Callable[[], Serializer]) -> None:
    rng = random.Random(seed)
    ops = _gen_ops(rng, 40)

    se = build()
    total = 0
    for op in ops:
        total += _nibbles_of(op, se.is_at_byte_boundary())
        _apply(se, op)
        assert se.cur_pos() == total
        assert se.is_at_byte_boundary() == (total % 2 == 0)
    data = bytes(se.finalize())
    assert len(data) == (total + 1) // 2

    de = Deserializer.build_bytes_deserializer(data)
    consumed = 0
    for op in ops:
        consumed += _nibbles_of(op, de.is_at_byte_boundary())
        _check(de, op)
        assert de.is_at_byte_boundary() == (consumed % 2 == 0)
        assert de.nibbles_left() == 2 * len(data) - consumed
    assert bytes(de.finalize()) == b''


@pytest.mark.parametrize('seed', range(20))
def test_size_serializer_equivalence(seed: int) -> None:
    rng = random.Random(seed)
    ops = _gen_ops(rng, 30)

    size_se = SizeSerializer()
    slice_se = SliceSerializer(bytearray(1024))
    for op in ops:
        _apply(size_se, op)
        _apply(slice_se, op)
    nibbles = size_se.finalize()
    data = slice_se.finalize()
    assert nibbles == 2 * len(data) - (nibbles % 2)


@pytest.mark.parametrize('seed', range(5))
def test_backends_agree(seed: int) -> None:
    rng = random.Random(seed)
    ops = _gen_ops(rng, 50)
    outputs = []
    for build in BUILDERS:
        se = build()
        for op in ops:
            _apply(se, op)
        outputs.append(bytes(se.finalize()))
    assert outputs[0] == outputs[1] == outputs[2]


def test_every_nibble_value_through_every_alignment() -> None:
    se = BytesSerializer()
    for first in range(16):
        se.push_nibble(first)
        for byte in range(256):
            se.push_byte(byte)
    de = Deserializer.build_bytes_deserializer(se.finalize())
    for first in range(16):
        assert de.take_nibble() == first
        for byte in range(256):
            assert de.take_byte() == byte
    assert de.is_empty()
