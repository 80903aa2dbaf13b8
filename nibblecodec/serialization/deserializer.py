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
from typing import TYPE_CHECKING, overload

from typing_extensions import Self

from .exceptions import AlreadyFinalizedError
from .types import Buffer

if TYPE_CHECKING:
    from .adapters import MaxNibblesDeserializer
    from .bytes_deserializer import BytesDeserializer


class Deserializer(ABC):
    """Read side of the nibble codec, the mirror of `Serializer`."""

    _finalized: bool = False

    def _check_not_finalized(self) -> None:
        if self._finalized:
            raise AlreadyFinalizedError('deserializer was already finalized')

    def _mark_finalized(self) -> None:
        self._check_not_finalized()
        self._finalized = True

    @abstractmethod
    def finalize(self) -> Buffer:
        """Get the bytes that were not consumed, the deserializer cannot be used after this."""
        raise NotImplementedError

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @abstractmethod
    def nibbles_left(self) -> int:
        raise NotImplementedError

    def is_empty(self) -> bool:
        return self.nibbles_left() == 0

    @abstractmethod
    def is_at_byte_boundary(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def take_nibble(self) -> int:
        """Read a single nibble."""
        raise NotImplementedError

    @abstractmethod
    def take_byte(self) -> int:
        """Read a single byte as unsigned int, it can straddle two bytes of the input."""
        raise NotImplementedError

    @abstractmethod
    def take_n(self, n: int) -> Buffer:
        """Skip the padding nibble if not on a byte boundary and read `n` whole bytes.

        Availability is checked first, when there is not enough data nothing is consumed.
        """
        raise NotImplementedError

    def with_max_nibbles(self, max_nibbles: int) -> MaxNibblesDeserializer[Self]:
        """Helper method to wrap the current deserializer with MaxNibblesDeserializer."""
        from .adapters import MaxNibblesDeserializer
        return MaxNibblesDeserializer(self, max_nibbles)

    @overload
    def with_optional_max_nibbles(self, max_nibbles: None) -> Self:
        ...

    @overload
    def with_optional_max_nibbles(self, max_nibbles: int) -> MaxNibblesDeserializer[Self]:
        ...

    def with_optional_max_nibbles(self, max_nibbles: int | None) -> Self | MaxNibblesDeserializer[Self]:
        """Helper method to optionally wrap the current deserializer."""
        if max_nibbles is None:
            return self
        return self.with_max_nibbles(max_nibbles)
