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

from types import TracebackType
from typing import Any, Generic, TypeVar, Union

from typing_extensions import Self, override

from nibblecodec.serialization.deserializer import Deserializer
from nibblecodec.serialization.serializer import Serializer

from ..types import Buffer

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class GenericSerializerAdapter(Serializer, Generic[S]):
    inner: S

    def __init__(self, serializer: S) -> None:
        self.inner = serializer

    @override
    def finalize(self) -> Any:
        return self.inner.finalize()

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    @override
    def is_at_byte_boundary(self) -> bool:
        return self.inner.is_at_byte_boundary()

    @override
    def push_nibble(self, nibble: int) -> None:
        self.inner.push_nibble(nibble)

    @override
    def push_byte(self, data: int) -> None:
        self.inner.push_byte(data)

    @override
    def extend(self, data: Buffer) -> None:
        self.inner.extend(data)

    # allow using this adapter as a context manager:

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Union[type[BaseException], None],
        exc_value: Union[BaseException, None],
        traceback: Union[TracebackType, None],
    ) -> None:
        pass


class GenericDeserializerAdapter(Deserializer, Generic[D]):
    inner: D

    def __init__(self, deserializer: D) -> None:
        self.inner = deserializer

    @override
    def finalize(self) -> Buffer:
        return self.inner.finalize()

    @override
    def nibbles_left(self) -> int:
        return self.inner.nibbles_left()

    @override
    def is_at_byte_boundary(self) -> bool:
        return self.inner.is_at_byte_boundary()

    @override
    def take_nibble(self) -> int:
        return self.inner.take_nibble()

    @override
    def take_byte(self) -> int:
        return self.inner.take_byte()

    @override
    def take_n(self, n: int) -> Buffer:
        return self.inner.take_n(n)

    # allow using this adapter as a context manager:

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Union[type[BaseException], None],
        exc_value: Union[BaseException, None],
        traceback: Union[TracebackType, None],
    ) -> None:
        pass
