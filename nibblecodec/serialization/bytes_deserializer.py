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
from .deserializer import Deserializer
from .exceptions import UnexpectedEndError
from .types import Buffer

logger = get_logger()


class BytesDeserializer(Deserializer):
    """Simple implementation of a Deserializer to parse values from a byte sequence.

    This implementation keeps a cursor over a memoryview of the data, nothing is copied: `take_n` and `finalize`
    return views into the original buffer.
    """

    def __init__(self, data: Buffer) -> None:
        self.log = logger.new()
        self._view = memoryview(data).cast('B')
        self._cursor = 0
        self._end = len(self._view)
        self._at_boundary = True

    def _whole_bytes_left(self) -> int:
        """Bytes left after the one holding an unread low nibble, if any."""
        return self._end - self._cursor - (0 if self._at_boundary else 1)

    @override
    def finalize(self) -> memoryview:
        self._mark_finalized()
        # a half consumed byte is consumed, its low nibble is padding
        start = self._cursor if self._at_boundary else self._cursor + 1
        result = self._view[start:]
        self.log.debug('deserializer finalized', consumed=start, remaining=len(result))
        del self._view
        return result

    @override
    def nibbles_left(self) -> int:
        self._check_not_finalized()
        return 2 * (self._end - self._cursor) - (0 if self._at_boundary else 1)

    @override
    def is_at_byte_boundary(self) -> bool:
        self._check_not_finalized()
        return self._at_boundary

    @override
    def take_nibble(self) -> int:
        self._check_not_finalized()
        if self._cursor == self._end:
            raise UnexpectedEndError('not enough data to read a nibble')
        if self._at_boundary:
            self._at_boundary = False
            return self._view[self._cursor] >> 4
        nibble = self._view[self._cursor] & NIBBLE_MASK
        self._cursor += 1
        self._at_boundary = True
        return nibble

    @override
    def take_byte(self) -> int:
        self._check_not_finalized()
        if self._at_boundary:
            if self._cursor == self._end:
                raise UnexpectedEndError('not enough data to read a byte')
            b = self._view[self._cursor]
            self._cursor += 1
            return b
        if self._end - self._cursor < 2:
            raise UnexpectedEndError('not enough data to read a byte')
        msn = self._view[self._cursor] & NIBBLE_MASK
        self._cursor += 1
        lsn = self._view[self._cursor] >> 4
        return (msn << 4) | lsn

    @override
    def take_n(self, n: int) -> memoryview:
        self._check_not_finalized()
        if n < 0:
            raise ValueError('value cannot be negative')
        if self._whole_bytes_left() < n:
            raise UnexpectedEndError('not enough bytes to read')
        if not self._at_boundary:
            self._cursor += 1
            self._at_boundary = True
        b = self._view[self._cursor:self._cursor + n]
        self._cursor += n
        return b
