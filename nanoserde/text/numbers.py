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

"""
Float formatting for the text formats.

Floats are written in the shortest form that parses back to the exact same value. For f64 that is Python's own
`repr`, for f32 the search is done over single precision values, so `0.1` stored as f32 is written as `0.1` and not as
the `0.10000000149011612` that the underlying double would produce.

>>> format_float(2.0)
'2.0'
>>> format_float(1e30)
'1e+30'
>>> from nanoserde.serialization.encoding.float import to_f32
>>> format_float(to_f32(0.1), single=True)
'0.1'
>>> format_float(to_f32(100.0), single=True)
'100.0'
>>> format_float(to_f32(3.4028234663852886e38), single=True)
'3.4028235e+38'
>>> format_float(float('nan'))
Traceback (most recent call last):
...
ValueError: nan cannot be written as text
"""

import math
from decimal import Decimal

from nanoserde.serialization.encoding.float import to_f32

# same thresholds that `repr(float)` uses to switch to scientific notation
_MIN_POSITIONAL = 1e-4
_MAX_POSITIONAL = 1e16

# 9 significant digits are always enough to round-trip a f32
_F32_MAX_DIGITS = 9


def format_float(value: float, *, single: bool = False) -> str:
    if not math.isfinite(value):
        raise ValueError(f'{value} cannot be written as text')
    if not single or value == 0.0:
        return repr(value)
    for digits in range(1, _F32_MAX_DIGITS + 1):
        text = f'{value:.{digits - 1}e}'
        try:
            rounded = to_f32(float(text))
        except (ValueError, OverflowError):
            # rounding up near the f32 limits can leave the single precision range
            continue
        if rounded == value:
            break
    number = Decimal(text).normalize()
    if _MIN_POSITIONAL <= abs(value) < _MAX_POSITIONAL:
        text = format(number, 'f')
        return text if '.' in text else text + '.0'
    mantissa, exponent = f'{number:e}'.split('e')
    return f'{mantissa}e{int(exponent):+03d}'
