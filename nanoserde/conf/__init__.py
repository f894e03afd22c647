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

parent_dir = Path(__file__).parent

DEFAULT_SETTINGS_FILEPATH = str(parent_dir / 'default.yml')
STRICT_SETTINGS_FILEPATH = str(parent_dir / 'strict.yml')
UNITTESTS_SETTINGS_FILEPATH = str(parent_dir / 'unittests.yml')

# environment variable that points to the yaml file used by `get_global_settings()`
CONFIG_YAML_ENV_VAR = 'NANOSERDE_CONFIG_YAML'

__all__ = [
    'CONFIG_YAML_ENV_VAR',
    'DEFAULT_SETTINGS_FILEPATH',
    'STRICT_SETTINGS_FILEPATH',
    'UNITTESTS_SETTINGS_FILEPATH',
]
