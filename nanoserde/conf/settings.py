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
from typing import Optional, Union

from pydantic import Field

from nanoserde.utils import pydantic
from nanoserde.utils.yaml import dict_from_extended_yaml


class CodecSettings(pydantic.BaseModel):
    # Accept `// ...` and `/* ... */` comments wherever JSON allows whitespace
    JSON_ALLOW_COMMENTS: bool = True

    # Accept a `,` right before the closing `]` or `}` of a JSON array or object
    JSON_ALLOW_TRAILING_COMMA: bool = True

    # Accept a leading `+` on JSON numbers
    JSON_ALLOW_PLUS_SIGN: bool = True

    # Skip record keys that are not declared, when disabled an unknown key is an unexpected-key error like in RON
    JSON_SKIP_UNKNOWN_KEYS: bool = True

    # Accept integers as booleans in RON, zero is false and anything else is true
    RON_ALLOW_NUMERIC_BOOL: bool = True

    # Number of spaces per nesting level in RON output
    RON_INDENT_WIDTH: int = Field(default=4, ge=0)

    # Largest length prefix accepted by the binary decoder, `None` disables the check
    MAX_LENGTH_PREFIX: Optional[int] = Field(default=2**32, ge=0)

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'CodecSettings':
        """Takes a filepath to a yaml file and returns a validated CodecSettings instance."""
        settings_dict = dict_from_extended_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
