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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, overload

from typing_extensions import Self

from .consts import MAX_BYTE, MAX_NIBBLE
from .exceptions import AlreadyFinalizedError
from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxNibblesSerializer
    from .bytes_serializer import BoundedSerializer, BytesSerializer
    from .size_serializer import SizeSerializer


class Serializer(ABC):
    """Write side of the nibble codec.

    Nibbles are packed two per byte, high nibble first. Implementations keep a cursor and a flag telling whether the
    cursor sits on a byte boundary, every push must keep that flag consistent with the number of nibbles written.

    A serializer is used for a single pass: after `finalize` is called any other call raises `AlreadyFinalizedError`.
    """

    _finalized: bool = False

    def _check_not_finalized(self) -> None:
        if self._finalized:
            raise AlreadyFinalizedError('serializer was already finalized')

    def _mark_finalized(self) -> None:
        self._check_not_finalized()
        self._finalized = True

    @abstractmethod
    def finalize(self) -> Any:
        """Get the backend output, the serializer cannot be reused after this."""
        raise NotImplementedError

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of nibbles written so far."""
        raise NotImplementedError

    def is_at_byte_boundary(self) -> bool:
        return self.cur_pos() % 2 == 0

    @abstractmethod
    def push_nibble(self, nibble: int) -> None:
        """Write a single nibble."""
        raise NotImplementedError

    @abstractmethod
    def push_byte(self, data: int) -> None:
        """Write a single byte, it can straddle two bytes of the output when the cursor is not on a boundary."""
        raise NotImplementedError

    def align(self) -> None:
        """Write a zero padding nibble if the cursor is not on a byte boundary."""
        if not self.is_at_byte_boundary():
            self.push_nibble(0)

    def extend(self, data: Buffer) -> None:
        """Write a byte sequence starting on a byte boundary."""
        # XXX: it is recommended that implementors of Serializer specialize this implementation, the output must be
        #      the same as this one
        self.align()
        for byte in bytes(memoryview(data)):
            self.push_byte(byte)

    def with_max_nibbles(self, max_nibbles: int) -> MaxNibblesSerializer[Self]:
        """Helper method to wrap the current serializer with MaxNibblesSerializer."""
        from .adapters import MaxNibblesSerializer
        return MaxNibblesSerializer(self, max_nibbles)

    @overload
    def with_optional_max_nibbles(self, max_nibbles: None) -> Self:
        ...

    @overload
    def with_optional_max_nibbles(self, max_nibbles: int) -> MaxNibblesSerializer[Self]:
        ...

    def with_optional_max_nibbles(self, max_nibbles: int | None) -> Self | MaxNibblesSerializer[Self]:
        """Helper method to optionally wrap the current serializer."""
        if max_nibbles is None:
            return self
        return self.with_max_nibbles(max_nibbles)

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    @staticmethod
    def build_bounded_serializer(capacity: int | None = None) -> BoundedSerializer:
        from .bytes_serializer import BoundedSerializer
        return BoundedSerializer(capacity)

    @staticmethod
    def build_size_serializer() -> SizeSerializer:
        from .size_serializer import SizeSerializer
        return SizeSerializer()


def check_nibble(nibble: int) -> None:
    if not 0 <= nibble <= MAX_NIBBLE:
        raise ValueError(f'{nibble!r} does not fit in a nibble')


def check_byte(data: int) -> None:
    if not 0 <= data <= MAX_BYTE:
        raise ValueError(f'{data!r} does not fit in a byte')
