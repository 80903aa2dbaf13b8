# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
This module implements Vlu32N, a variable-length encoding for unsigned 32-bit integers that uses nibbles as units.

Vlu32N is a nibble-sized relative of LEB128: each nibble carries 3 data bits and 1 continuation bit (the MSB), but the
order is big-endian, the most significant group comes first.

- The 32 bits of the value are split, most significant first, into one 2-bit group followed by ten 3-bit groups.
- Leading groups that are zero are not written, a value of 0 is written as a single zero nibble.
- Every written group is one nibble: low 3 bits are data, the MSB is set on every nibble except the last.
- The largest value, 0xFFFFFFFF, takes 11 nibbles.

>>> se = Serializer.build_bytes_serializer()
>>> encode_vlu32n(se, 0)  # writes 0
>>> encode_vlu32n(se, 7)  # writes 7
>>> encode_vlu32n(se, 8)  # writes 90
>>> encode_vlu32n(se, 0xFFFFFFFF)  # writes bfffffffff7
>>> se.finalize().hex()
'0790bfffffffff70'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0790bfffffffff70'))
>>> decode_vlu32n(de)  # reads 0
0
>>> decode_vlu32n(de)  # reads 7
7
>>> decode_vlu32n(de)  # reads 90
8
>>> decode_vlu32n(de)  # reads bfffffffff7
4294967295
>>> bytes(de.finalize())
b''

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('fffffffffff0'))
>>> try:
...     decode_vlu32n(de)
... except MalformedVarintError as e:
...     print(*e.args)
continuation flag set on the last nibble
"""

from nibblecodec.serialization import Deserializer, MalformedVarintError, Serializer

MAX_VLU32N = 0xFFFF_FFFF
MAX_VLU32N_NIBBLES = 11

_CONTINUATION = 0b1000
_DATA_MASK = 0b0111


def _groups(value: int) -> list[int]:
    """Split a 32-bit value in its 2-bit head group and ten 3-bit groups, most significant first."""
    return [value >> 30] + [(value >> shift) & _DATA_MASK for shift in range(27, -1, -3)]


def _significant_groups(value: int) -> list[int]:
    groups = _groups(value)
    while len(groups) > 1 and groups[0] == 0:
        groups.pop(0)
    return groups


def vlu32n_size(value: int) -> int:
    """ Number of nibbles needed to encode `value`.

    >>> [vlu32n_size(v) for v in (0, 7, 8, 63, 64, 0x3FFFFFFF, 0x40000000, 0xFFFFFFFF)]
    [1, 1, 2, 2, 3, 10, 11, 11]
    """
    if not 0 <= value <= MAX_VLU32N:
        raise ValueError(f'{value} is out of range for vlu32n')
    return len(_significant_groups(value))


def encode_vlu32n(serializer: Serializer, value: int) -> None:
    """ Encodes an unsigned 32-bit integer using Vlu32N.

    This module's docstring has more details on Vlu32N and examples.
    """
    if not 0 <= value <= MAX_VLU32N:
        raise ValueError(f'{value} is out of range for vlu32n')
    groups = _significant_groups(value)
    last = len(groups) - 1
    for i, group in enumerate(groups):
        serializer.push_nibble(group if i == last else group | _CONTINUATION)


def decode_vlu32n(deserializer: Deserializer) -> int:
    """ Decodes a Vlu32N-encoded integer.

    At most 11 nibbles are read, an 11th nibble with the continuation flag set, or data bits that do not fit in 32
    bits, raise `MalformedVarintError`.

    This module's docstring has more details on Vlu32N and examples.
    """
    value = 0
    for _ in range(MAX_VLU32N_NIBBLES):
        nibble = deserializer.take_nibble()
        value = (value << 3) | (nibble & _DATA_MASK)
        if not nibble & _CONTINUATION:
            if value > MAX_VLU32N:
                raise MalformedVarintError('value does not fit in 32 bits')
            return value
    raise MalformedVarintError('continuation flag set on the last nibble')
