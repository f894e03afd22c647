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

from nanoserde.exception import NanoserdeError


class TomlError(NanoserdeError):
    """ Raised when a TOML document cannot be read, `line` and `col` are 0-based and rendered 1-based.

    >>> str(TomlError('Cannot parse toml string ', line=0, col=4))
    'Toml error: Cannot parse toml string , line:1 col:5'
    """

    def __init__(self, msg: str, *, line: int, col: int) -> None:
        self.msg = msg
        self.line = line
        self.col = col
        super().__init__(str(self))

    def __str__(self) -> str:
        return f'Toml error: {self.msg}, line:{self.line + 1} col:{self.col + 1}'
