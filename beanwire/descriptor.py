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
Component descriptors.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Tuple

from beanwire.exceptions import ConfigurationError


@dataclass(frozen=True)
class ComponentDescriptor:
    """
    Describes how to build a single component.

    Property names double as the identifiers of the components injected into
    them: a property ``dao`` is wired with the component registered as ``dao``.
    """

    id: str
    class_name: str
    constructor_arg_refs: Tuple[str, ...] = field(default_factory=tuple)
    property_refs: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate descriptor and normalise reference sequences."""
        if not self.id:
            raise ConfigurationError("Component descriptor must have an id")
        if not self.class_name:
            raise ConfigurationError(f"Component '{self.id}' must have a class name", component_id=self.id)

        # Frozen dataclass, so go through object.__setattr__
        object.__setattr__(self, "constructor_arg_refs", tuple(self.constructor_arg_refs))
        object.__setattr__(self, "property_refs", tuple(self.property_refs))

    @classmethod
    def create(
        cls,
        id: str,
        class_name: str,
        constructor_args: Iterable[str] = (),
        properties: Iterable[str] = (),
    ) -> "ComponentDescriptor":
        """Create a descriptor from arbitrary iterables of references."""
        return cls(
            id=id,
            class_name=class_name,
            constructor_arg_refs=tuple(constructor_args),
            property_refs=tuple(properties),
        )

    @property
    def has_constructor_args(self) -> bool:
        return len(self.constructor_arg_refs) > 0

    @property
    def has_properties(self) -> bool:
        return len(self.property_refs) > 0

    def references(self) -> Tuple[str, ...]:
        """All identifiers this component refers to, constructor args first."""
        return self.constructor_arg_refs + self.property_refs

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "class": self.class_name,
            "constructor_args": list(self.constructor_arg_refs),
            "properties": list(self.property_refs),
        }
