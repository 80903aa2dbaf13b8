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

from structlog import get_logger

from nibblecodec.serialization import Deserializer, SerializationError, Serializer
from nibblecodec.serialization.adapters import MaxNibblesExceededError
from nibblecodec.serialization.encoding.vlu32n import decode_vlu32n, encode_vlu32n

logger = get_logger()


def encode_unsigned(value: int, *, max_nibbles: int | None = None) -> bytes:
    """
    Receive an unsigned 32-bit integer and return its Vlu32N-encoded bytes, padded with a zero nibble when needed.

    >>> encode_unsigned(0) == bytes([0x00])
    True
    >>> encode_unsigned(8) == bytes([0x90])
    True
    >>> encode_unsigned(0xFFFFFFFF).hex()
    'bfffffffff70'
    >>> try:
    ...     encode_unsigned(0xFFFFFFFF, max_nibbles=10)
    ... except ValueError as e:
    ...     print(e)
    cannot encode more than 10 nibbles
    """
    serializer: Serializer = Serializer.build_bytes_serializer()
    try:
        encode_vlu32n(serializer.with_optional_max_nibbles(max_nibbles), value)
    except MaxNibblesExceededError as e:
        logger.debug('vlu32n value too big', value=value, max_nibbles=max_nibbles)
        raise ValueError(f'cannot encode more than {max_nibbles} nibbles') from e
    except SerializationError as e:
        logger.debug('vlu32n value could not be encoded', value=value, error=str(e))
        raise ValueError('serialization error') from e
    return serializer.finalize()


def decode_unsigned(data: bytes, *, max_nibbles: int | None = None) -> tuple[int, bytes]:
    """
    Receive and consume a buffer returning a tuple of the unpacked Vlu32N-encoded unsigned integer and the remaining
    buffer. The remaining buffer starts on the byte after the last nibble of the integer.

    >>> decode_unsigned(bytes([0x00]) + b'test')
    (0, b'test')
    >>> decode_unsigned(bytes([0x90]) + b'test')
    (8, b'test')
    >>> decode_unsigned(bytes([0xA9, 0x00]) + b'test', max_nibbles=3)
    (136, b'test')
    >>> try:
    ...     decode_unsigned(bytes([0xA9, 0x00]) + b'test', max_nibbles=2)
    ... except ValueError as e:
    ...     print(e)
    cannot decode more than 2 nibbles
    """
    deserializer = Deserializer.build_bytes_deserializer(data)
    try:
        value = decode_vlu32n(deserializer.with_optional_max_nibbles(max_nibbles))
    except MaxNibblesExceededError as e:
        logger.debug('vlu32n encoding too long', max_nibbles=max_nibbles)
        raise ValueError(f'cannot decode more than {max_nibbles} nibbles') from e
    except SerializationError as e:
        logger.debug('invalid vlu32n encoding', error=str(e))
        raise ValueError('deserialization error') from e
    return value, bytes(deserializer.finalize())
