# -------------------------------------------------------------------------------------------------
#  Copyright (C) 2015-2025 Nautech Systems Pty Ltd. All rights reserved.
#  https://nautechsystems.io
#
#  Licensed under the GNU Lesser General Public License Version 3.0 (the "License");
#  You may not use this file except in compliance with the License.
#  You may obtain a copy of the License at https://www.gnu.org/licenses/lgpl-3.0.en.html
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# -------------------------------------------------------------------------------------------------
"""
Loading component definitions from YAML, JSON and XML sources.

YAML / JSON::

    components:
      - id: dao
        class: app.dao.SqlDao
      - id: service
        class: app.service.OrderService
        constructor_args: [dao]     # or [{ref: dao}]
        properties: [auditor]       # or [{name: auditor}]

XML::

    <beans>
      <bean id="service" class="app.service.OrderService">
        <constructor-arg ref="dao"/>
        <property name="auditor"/>
      </bean>
    </beans>
"""

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from nautilus_trader.common.component import Logger

from beanwire.descriptor import ComponentDescriptor
from beanwire.exceptions import ConfigurationError


FORMATS = {
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".xml": "xml",
}


class ConfigLoader:
    """
    Parses component definitions into an ordered list of descriptors.
    """

    def __init__(self) -> None:
        self._logger = Logger(self.__class__.__name__)

    def load(self, config_path: Union[str, Path]) -> List[ComponentDescriptor]:
        """
        Load component definitions from a file.

        The format is chosen from the file suffix.

        Parameters
        ----------
        config_path : str or Path
            Path to a .yml, .yaml, .json or .xml file

        Returns
        -------
        List[ComponentDescriptor]
            Descriptors in definition order

        Raises
        ------
        ConfigurationError
            If the file is missing, unsupported or malformed
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigurationError(
                f"Component definition file not found: {config_path}",
                source=str(path),
                suggestion="Check the file path and ensure the file exists",
            )

        fmt = FORMATS.get(path.suffix.lower())
        if fmt is None:
            raise ConfigurationError(
                f"Unsupported component definition format: {path.suffix}",
                source=str(path),
                suggestion="Use .yml, .yaml, .json or .xml files",
            )

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read component definitions from '{config_path}': {e}",
                source=str(path),
                suggestion="Check file permissions",
            ) from e

        descriptors = self.load_string(text, fmt, source=str(path))
        self._logger.info(f"Loaded {len(descriptors)} component definition(s) from {path}")
        return descriptors

    def load_string(
        self,
        text: str,
        fmt: str,
        source: Optional[str] = None,
    ) -> List[ComponentDescriptor]:
        """
        Parse component definitions from text.

        Parameters
        ----------
        text : str
            Definition content
        fmt : str
            One of 'yaml', 'json' or 'xml'
        source : str, optional
            Origin of the text, for error messages
        """
        source = source or f"<{fmt}>"

        if fmt == "xml":
            return self._parse_xml(text, source)

        try:
            if fmt == "json":
                data = json.loads(text)
            elif fmt == "yaml":
                data = yaml.safe_load(text)
            else:
                raise ConfigurationError(
                    f"Unsupported component definition format: {fmt}",
                    source=source,
                    suggestion="Use 'yaml', 'json' or 'xml'",
                )
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse component definitions: {e}",
                source=source,
                suggestion="Check file syntax and format",
            ) from e

        return self.load_dict(data or {}, source=source)

    def load_dict(self, data: Dict[str, Any], source: Optional[str] = None) -> List[ComponentDescriptor]:
        """
        Build descriptors from an already-parsed mapping with a ``components`` list.
        """
        source = source or "<dict>"

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Component definitions must be a mapping with a 'components' list",
                source=source,
            )

        components = data.get("components", [])
        if not isinstance(components, list):
            raise ConfigurationError(
                "'components' must be a list",
                source=source,
            )

        return [self._parse_entry(entry, index, source) for index, entry in enumerate(components)]

    def _parse_entry(self, entry: Any, index: int, source: str) -> ComponentDescriptor:
        if not isinstance(entry, dict):
            raise ConfigurationError(
                f"Component definition #{index} must be a mapping",
                source=source,
            )

        component_id = entry.get("id")
        class_name = entry.get("class")

        if not component_id:
            raise ConfigurationError(
                f"Component definition #{index} is missing 'id'",
                source=source,
            )

        if not class_name:
            raise ConfigurationError(
                f"Component '{component_id}' is missing 'class'",
                source=source,
                component_id=component_id,
            )

        constructor_args = [
            self._reference(item, "ref", component_id, source)
            for item in self._reference_list(entry, "constructor_args", component_id, source)
        ]
        properties = [
            self._reference(item, "name", component_id, source)
            for item in self._reference_list(entry, "properties", component_id, source)
        ]

        return ComponentDescriptor.create(str(component_id), str(class_name), constructor_args, properties)

    def _reference_list(self, entry: Dict[str, Any], key: str, component_id: str, source: str) -> List[Any]:
        value = entry.get(key)
        if value is None:
            return []

        # A single reference may be written without a list
        if isinstance(value, (str, dict)):
            return [value]

        if not isinstance(value, list):
            raise ConfigurationError(
                f"Component '{component_id}' has an invalid '{key}': expected a list, got {value!r}",
                source=source,
                component_id=component_id,
            )

        return value

    def _reference(self, item: Any, key: str, component_id: str, source: str) -> str:
        # Accept plain strings or single-key mappings such as {ref: dao}
        value = item.get(key) if isinstance(item, dict) else item

        if not isinstance(value, str) or not value:
            raise ConfigurationError(
                f"Component '{component_id}' has an entry without a '{key}': {item!r}",
                source=source,
                component_id=component_id,
            )

        return value

    def _parse_xml(self, text: str, source: str) -> List[ComponentDescriptor]:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise ConfigurationError(
                f"Failed to parse component definitions: {e}",
                source=source,
                suggestion="Check file syntax and format",
            ) from e

        descriptors = []
        # {*} matches elements in any namespace, or none
        for index, element in enumerate(root.findall("{*}bean")):
            component_id = element.get("id")
            class_name = element.get("class")

            if not component_id:
                raise ConfigurationError(f"Bean #{index} is missing 'id'", source=source)

            if not class_name:
                raise ConfigurationError(
                    f"Bean '{component_id}' is missing 'class'",
                    source=source,
                    component_id=component_id,
                )

            constructor_args = [
                self._reference(arg.get("ref"), "ref", component_id, source)
                for arg in element.findall("{*}constructor-arg")
            ]
            properties = [
                self._reference(prop.get("name"), "name", component_id, source)
                for prop in element.findall("{*}property")
            ]

            descriptors.append(
                ComponentDescriptor.create(component_id, class_name, constructor_args, properties)
            )

        return descriptors
