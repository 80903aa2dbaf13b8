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

from .serializer import Serializer, check_byte, check_nibble
from .types import Buffer

logger = get_logger()


class SizeSerializer(Serializer):
    """Measurement implementation of Serializer, nothing is stored, only the number of nibbles is counted.

    Every push succeeds. The count includes the padding nibble written by `extend` when not on a byte boundary, so it
    matches the nibbles that any other backend would produce for the same calls.

    >>> se = SizeSerializer()
    >>> se.push_nibble(0x3)
    >>> se.extend(b'ab')
    >>> se.push_byte(0xff)
    >>> se.finalize()
    8
    """

    def __init__(self) -> None:
        self.log = logger.new()
        self._size_nibbles = 0

    @override
    def finalize(self) -> int:
        self._mark_finalized()
        self.log.debug('size serializer finalized', nibbles=self._size_nibbles)
        return self._size_nibbles

    @override
    def cur_pos(self) -> int:
        self._check_not_finalized()
        return self._size_nibbles

    @override
    def push_nibble(self, nibble: int) -> None:
        self._check_not_finalized()
        check_nibble(nibble)
        self._size_nibbles += 1

    @override
    def push_byte(self, data: int) -> None:
        self._check_not_finalized()
        check_byte(data)
        self._size_nibbles += 2

    @override
    def extend(self, data: Buffer) -> None:
        self._check_not_finalized()
        self.align()
        self._size_nibbles += 2 * memoryview(data).nbytes
