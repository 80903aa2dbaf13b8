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

from .consts import HIGH_NIBBLE_MASK, NIBBLE_MASK
from .exceptions import BufferFullError
from .serializer import Serializer, check_byte, check_nibble
from .types import Buffer

logger = get_logger()


class SliceSerializer(Serializer):
    """Implementation of Serializer that writes into a caller-supplied writable buffer.

    The buffer is borrowed for the lifetime of the serializer and never grows, running out of room raises
    `BufferFullError`. On `finalize` the used prefix of the buffer is returned as a memoryview, when the last byte
    only holds a high nibble its low nibble is zero.
    """

    def __init__(self, buf: bytearray | memoryview) -> None:
        view = memoryview(buf)
        if view.readonly:
            raise TypeError('buffer must be writable')
        self.log = logger.new()
        self._view = view.cast('B')
        self._cursor = 0
        self._end = len(self._view)
        self._at_boundary = True

    def _bytes_left(self) -> int:
        return self._end - self._cursor

    @override
    def finalize(self) -> memoryview:
        self._mark_finalized()
        used = self._cursor if self._at_boundary else self._cursor + 1
        self.log.debug('slice serializer finalized', used=used, capacity=self._end)
        result = self._view[:used]
        del self._view
        return result

    @override
    def cur_pos(self) -> int:
        self._check_not_finalized()
        return 2 * self._cursor + (0 if self._at_boundary else 1)

    @override
    def is_at_byte_boundary(self) -> bool:
        self._check_not_finalized()
        return self._at_boundary

    def nibbles_left(self) -> int:
        self._check_not_finalized()
        return 2 * self._bytes_left() - (0 if self._at_boundary else 1)

    @override
    def push_nibble(self, nibble: int) -> None:
        self._check_not_finalized()
        check_nibble(nibble)
        if self._cursor == self._end:
            raise BufferFullError('not enough room to write a nibble')
        if self._at_boundary:
            self._view[self._cursor] = nibble << 4
            self._at_boundary = False
        else:
            self._view[self._cursor] = (self._view[self._cursor] & HIGH_NIBBLE_MASK) | nibble
            self._cursor += 1
            self._at_boundary = True

    @override
    def push_byte(self, data: int) -> None:
        self._check_not_finalized()
        check_byte(data)
        if self._at_boundary:
            if self._cursor == self._end:
                raise BufferFullError('not enough room to write a byte')
            self._view[self._cursor] = data
            self._cursor += 1
        else:
            # the byte straddles the pending byte and the next one
            if self._bytes_left() < 2:
                raise BufferFullError('not enough room to write a byte')
            self._view[self._cursor] = (self._view[self._cursor] & HIGH_NIBBLE_MASK) | (data >> 4)
            self._cursor += 1
            self._view[self._cursor] = (data & NIBBLE_MASK) << 4

    @override
    def extend(self, data: Buffer) -> None:
        self._check_not_finalized()
        part = memoryview(data).cast('B')
        needed = len(part) if self._at_boundary else len(part) + 1
        if self._bytes_left() < needed:
            raise BufferFullError('not enough room to write the byte sequence')
        self.align()
        self._view[self._cursor:self._cursor + len(part)] = part
        self._cursor += len(part)
