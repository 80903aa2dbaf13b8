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

from pathlib import Path
from typing import Union

from pydantic import field_validator

from nibblecodec.utils.pydantic import BaseModel
from nibblecodec.utils.yaml import model_from_extended_yaml


class NibbleCodecSettings(BaseModel):
    # Capacity in bytes of a BoundedSerializer built without an explicit capacity
    BOUNDED_SERIALIZER_CAPACITY: int = 2048

    # Maximum length of a length-prefixed byte sequence, checked when encoding and decoding
    BYTES_MAX_LENGTH: int = 65536

    @field_validator('BOUNDED_SERIALIZER_CAPACITY', 'BYTES_MAX_LENGTH')
    @classmethod
    def _check_not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError('value cannot be negative')
        return value

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'NibbleCodecSettings':
        """Takes a filepath to a yaml file and returns a validated NibbleCodecSettings instance."""
        return model_from_extended_yaml(cls, filepath=filepath)
