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

from copy import deepcopy
from typing import Any, TypeVar

K = TypeVar('K')


def deep_merge(first_dict: dict[K, Any], second_dict: dict[K, Any]) -> dict[K, Any]:
    """
    Recursively merges two dicts, returning a new one with the merged values. Keeps both input dicts intact.

    >>> base = dict(BOUNDED_SERIALIZER_CAPACITY=2048, extra=dict(a=1, b=2))
    >>> override = dict(extra=dict(b=3))
    >>> deep_merge(base, override) == dict(BOUNDED_SERIALIZER_CAPACITY=2048, extra=dict(a=1, b=3))
    True
    >>> base == dict(BOUNDED_SERIALIZER_CAPACITY=2048, extra=dict(a=1, b=2))
    True
    """
    merged = deepcopy(first_dict)

    def do_deep_merge(first: dict[K, Any], second: dict[K, Any]) -> dict[K, Any]:
        for key, value in second.items():
            if isinstance(first.get(key), dict) and isinstance(value, dict):
                do_deep_merge(first[key], value)
            else:
                first[key] = value
        return first

    return do_deep_merge(merged, second_dict)
