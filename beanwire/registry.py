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
Descriptor registry.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from nautilus_trader.common.component import Logger

from beanwire.descriptor import ComponentDescriptor
from beanwire.exceptions import ComponentNotFoundError, RegistryError


class DescriptorRegistry:
    """
    Registry of component descriptors keyed by component id.

    Registering an id twice replaces the earlier descriptor (last write wins),
    while keeping the id's original position in iteration order. Once sealed,
    the registry rejects further registrations.
    """

    def __init__(self, descriptors: Optional[Iterable[ComponentDescriptor]] = None) -> None:
        self._descriptors: Dict[str, ComponentDescriptor] = {}
        self._sealed = False
        self._logger = Logger(self.__class__.__name__)

        if descriptors:
            self.register_all(descriptors)

    def register(self, descriptor: ComponentDescriptor) -> None:
        """
        Register a descriptor.

        Parameters
        ----------
        descriptor : ComponentDescriptor
            Descriptor to store under its id

        Raises
        ------
        RegistryError
            If the registry has been sealed
        """
        if self._sealed:
            raise RegistryError(
                f"Cannot register '{descriptor.id}': registry is sealed",
                component_id=descriptor.id,
            )

        if descriptor.id in self._descriptors:
            self._logger.debug(f"Overwriting descriptor for '{descriptor.id}'")

        self._descriptors[descriptor.id] = descriptor
        self._logger.debug(f"Registered descriptor '{descriptor.id}' ({descriptor.class_name})")

    def register_all(self, descriptors: Iterable[ComponentDescriptor]) -> int:
        """Register descriptors in order, returning how many were processed."""
        count = 0
        for descriptor in descriptors:
            self.register(descriptor)
            count += 1
        return count

    def lookup(self, component_id: str) -> Optional[ComponentDescriptor]:
        """Get descriptor by id, or None if not registered."""
        return self._descriptors.get(component_id)

    def get(self, component_id: str) -> ComponentDescriptor:
        """
        Get descriptor by id.

        Raises
        ------
        ComponentNotFoundError
            If no descriptor is registered for the id
        """
        descriptor = self._descriptors.get(component_id)
        if descriptor is None:
            raise ComponentNotFoundError(
                f"No component registered with id '{component_id}'",
                component_id=component_id,
            )
        return descriptor

    def ids(self) -> List[str]:
        """List registered ids in registration order."""
        return list(self._descriptors.keys())

    def seal(self) -> None:
        """Reject any further registration."""
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[ComponentDescriptor]:
        return iter(list(self._descriptors.values()))
