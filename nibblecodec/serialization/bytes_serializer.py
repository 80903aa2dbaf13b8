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
from typing_extensions import override

from .consts import NIBBLE_MASK
from .exceptions import BufferFullError
from .serializer import Serializer, check_byte, check_nibble
from .types import Buffer

logger = get_logger()


class BytesSerializer(Serializer):
    """Simple implementation of Serializer to write to memory.

    The serializer owns a bytearray that grows as needed, the only way to run out of room is failing to allocate, in
    which case `BufferFullError` is raised. When not on a byte boundary the last byte of the buffer holds the pending
    high nibble.
    """

    def __init__(self) -> None:
        self.log = logger.new()
        self._buf = bytearray()
        self._at_boundary = True

    def _check_room(self, n: int) -> None:
        """Check that `n` more bytes can be appended, unbounded here."""
        pass

    def _append(self, data: Buffer) -> None:
        try:
            self._buf += data
        except MemoryError as e:
            raise BufferFullError('could not grow buffer') from e

    @override
    def finalize(self) -> bytes:
        self._mark_finalized()
        result = bytes(self._buf)
        self.log.debug('serializer finalized', backend=type(self).__name__, length=len(result))
        del self._buf
        return result

    @override
    def cur_pos(self) -> int:
        self._check_not_finalized()
        return 2 * len(self._buf) - (0 if self._at_boundary else 1)

    @override
    def is_at_byte_boundary(self) -> bool:
        self._check_not_finalized()
        return self._at_boundary

    @override
    def push_nibble(self, nibble: int) -> None:
        self._check_not_finalized()
        check_nibble(nibble)
        if self._at_boundary:
            self._check_room(1)
            self._append(bytes([nibble << 4]))
            self._at_boundary = False
        else:
            self._buf[-1] |= nibble
            self._at_boundary = True

    @override
    def push_byte(self, data: int) -> None:
        self._check_not_finalized()
        check_byte(data)
        self._check_room(1)
        if self._at_boundary:
            self._append(bytes([data]))
        else:
            self._buf[-1] |= data >> 4
            self._append(bytes([(data & NIBBLE_MASK) << 4]))

    @override
    def extend(self, data: Buffer) -> None:
        self._check_not_finalized()
        part = memoryview(data).cast('B')
        self._check_room(len(part))
        # the pending byte already has a zero low nibble, closing it is the padding
        self._at_boundary = True
        self._append(part)


class BoundedSerializer(BytesSerializer):
    """Like BytesSerializer but the buffer cannot grow beyond a capacity fixed at construction.

    When no capacity is given the `BOUNDED_SERIALIZER_CAPACITY` setting is used.
    """

    def __init__(self, capacity: int | None = None) -> None:
        super().__init__()
        if capacity is None:
            from nibblecodec.conf.get_settings import get_global_settings
            capacity = get_global_settings().BOUNDED_SERIALIZER_CAPACITY
        if capacity < 0:
            raise ValueError('capacity cannot be negative')
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    @override
    def _check_room(self, n: int) -> None:
        if len(self._buf) + n > self._capacity:
            raise BufferFullError(f'capacity of {self._capacity} bytes exceeded')
