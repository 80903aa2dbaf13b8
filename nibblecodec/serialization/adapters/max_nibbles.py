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

from typing import TypeVar

from typing_extensions import override

from nibblecodec.serialization.deserializer import Deserializer
from nibblecodec.serialization.exceptions import SerializationError
from nibblecodec.serialization.serializer import Serializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter, GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class MaxNibblesExceededError(SerializationError):
    """ This error is raised when the adapted serializer reached its maximum nibbles write/read.

    After this exception is raised the adapted serializer cannot be used anymore. Handlers of this exception are
    expected to either: bubble up the exception (or an equivalent exception), or return an error. Handlers should not
    try to write again on the same serializer.

    The budget is counted in nibbles actually moved by the inner (de)serializer, so the padding nibble of
    `extend`/`take_n` counts as well.
    """
    pass


class MaxNibblesSerializer(GenericSerializerAdapter[S]):
    def __init__(self, serializer: S, max_nibbles: int) -> None:
        super().__init__(serializer)
        self._nibbles_left = max_nibbles

    def _check_update_exceeds(self, write_size: int) -> None:
        self._nibbles_left -= write_size
        if self._nibbles_left < 0:
            raise MaxNibblesExceededError

    @override
    def push_nibble(self, nibble: int) -> None:
        self._check_update_exceeds(1)
        super().push_nibble(nibble)

    @override
    def push_byte(self, data: int) -> None:
        self._check_update_exceeds(2)
        super().push_byte(data)

    @override
    def extend(self, data: Buffer) -> None:
        padding = 0 if self.is_at_byte_boundary() else 1
        self._check_update_exceeds(padding + 2 * memoryview(data).nbytes)
        super().extend(data)


class MaxNibblesDeserializer(GenericDeserializerAdapter[D]):
    """Deserializer adapter with a nibble budget.

    The budget is only charged once the inner read succeeds, a read that fails on the inner deserializer leaves the
    budget as it was, like the cursor.
    """

    def __init__(self, deserializer: D, max_nibbles: int) -> None:
        super().__init__(deserializer)
        self._nibbles_left = max_nibbles

    def _check_exceeds(self, read_size: int) -> None:
        if read_size > self._nibbles_left:
            raise MaxNibblesExceededError

    @override
    def take_nibble(self) -> int:
        self._check_exceeds(1)
        nibble = super().take_nibble()
        self._nibbles_left -= 1
        return nibble

    @override
    def take_byte(self) -> int:
        self._check_exceeds(2)
        b = super().take_byte()
        self._nibbles_left -= 2
        return b

    @override
    def take_n(self, n: int) -> Buffer:
        read_size = (0 if self.is_at_byte_boundary() else 1) + 2 * n
        self._check_exceeds(read_size)
        b = super().take_n(n)
        self._nibbles_left -= read_size
        return b
