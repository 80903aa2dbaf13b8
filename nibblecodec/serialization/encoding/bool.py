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
This module implements encoding a boolean value using 1 nibble.

- `False` maps to the nibble `0`
- `True` maps to the nibble `1`
- any other nibble value is invalid

>>> se = Serializer.build_bytes_serializer()
>>> encode_bool(se, True)
>>> encode_bool(se, False)
>>> encode_bool(se, True)
>>> se.finalize().hex()
'1010'

>>> de = Deserializer.build_bytes_deserializer(b'\x10')
>>> decode_bool(de)
True
>>> decode_bool(de)
False

>>> de = Deserializer.build_bytes_deserializer(b'\x20')
>>> try:
...     decode_bool(de)
... except ValueError as e:
...     print(*e.args)
0x2 is not a valid boolean
"""

from nibblecodec.serialization import Deserializer, Serializer


def encode_bool(serializer: Serializer, value: bool) -> None:
    """ Encodes a boolean value using 1 nibble.
    """
    assert isinstance(value, bool)
    serializer.push_nibble(0x1 if value else 0x0)


def decode_bool(deserializer: Deserializer) -> bool:
    """ Decodes a boolean value from 1 nibble.
    """
    i = deserializer.take_nibble()
    if i == 0:
        return False
    elif i == 1:
        return True
    else:
        raise ValueError(f'{i:#x} is not a valid boolean')
