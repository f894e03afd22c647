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

# largest length prefix accepted by default when reading sequences, strings and maps, this protects against allocating
# memory for absurd lengths read from corrupted or malicious data
DEFAULT_BYTES_MAX_LENGTH: int = 2**32

# length prefixes (and usize values) are always written as u64
LENGTH_PREFIX_BYTES: int = 8

# variant discriminants are always written as u16
VARIANT_TAG_BYTES: int = 2
