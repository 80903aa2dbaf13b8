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

r"""
This modules implements encoding of byte sequence by prefixing it with the length of the sequence encoded as Vlu32N.

The sequence itself always starts on a byte boundary, when the length prefix leaves the cursor in the middle of a byte
a zero nibble is written as padding.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # writes 4, a padding 0, then 74657374
>>> se.finalize().hex()
'4074657374'

>>> se = Serializer.build_bytes_serializer()
>>> raw_data = b'test' * 2
>>> encode_bytes(se, raw_data)  # writes 9 and 0 for the length 8, no padding needed
>>> encoded_data = se.finalize()
>>> len(encoded_data)
9
>>> encoded_data[:5].hex()
'9074657374'

>>> de = Deserializer.build_bytes_deserializer(encoded_data)  # that we encoded before
>>> decoded_data = decode_bytes(de)
>>> bytes(de.finalize())  # nothing left
b''
>>> decoded_data == raw_data
True

>>> de = Deserializer.build_bytes_deserializer(b'\x40testfoo')
>>> decode_bytes(de)
b'test'
>>> bytes(de.finalize())
b'foo'

>>> de = Deserializer.build_bytes_deserializer(b'\x40tes')
>>> try:
...     decode_bytes(de)
... except UnexpectedEndError as e:
...     print(*e.args)
not enough bytes to read
"""

from nibblecodec.serialization import Deserializer, Serializer, TooLongError, UnexpectedEndError  # noqa: F401

from .vlu32n import decode_vlu32n, encode_vlu32n


def _max_length(max_length: int | None) -> int:
    if max_length is not None:
        return max_length
    from nibblecodec.conf.get_settings import get_global_settings
    return get_global_settings().BYTES_MAX_LENGTH


def encode_bytes(serializer: Serializer, data: bytes, *, max_length: int | None = None) -> None:
    """ Encodes a byte-sequence adding a length prefix.

    When `max_length` is not given the `BYTES_MAX_LENGTH` setting is used as the limit.

    This modules's docstring has more details and examples.
    """
    assert isinstance(data, bytes)
    if len(data) > _max_length(max_length):
        raise TooLongError('data is too long')
    encode_vlu32n(serializer, len(data))
    serializer.extend(data)


def decode_bytes(deserializer: Deserializer, *, max_length: int | None = None) -> bytes:
    """ Decodes a byte-sequence with a length prefix.

    This modules's docstring has more details and examples.
    """
    size = decode_vlu32n(deserializer)
    if size > _max_length(max_length):
        raise TooLongError('requested length exceeds maximum length')
    return bytes(deserializer.take_n(size))
