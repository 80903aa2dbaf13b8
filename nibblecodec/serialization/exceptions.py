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


class SerializationError(Exception):
    pass


class BufferFullError(SerializationError):
    """The serializer has no room left for the byte that would be touched by a push.

    After this is raised the serializer state is unspecified and it should not be used anymore.
    """
    pass


class UnexpectedEndError(SerializationError):
    """The deserializer ran out of data before a take could complete."""
    pass


class MalformedVarintError(SerializationError):
    """The data does not hold a valid Vlu32N encoding.

    This is different from `UnexpectedEndError`, the data is not truncated but syntactically invalid.
    """
    pass


class AlreadyFinalizedError(SerializationError):
    pass


class TooLongError(SerializationError):
    pass
