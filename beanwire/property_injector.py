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
Setter-based property injection.
"""

from typing import Any, Callable, List, Optional, Sequence

from nautilus_trader.common.component import Logger

from beanwire.descriptor import ComponentDescriptor
from beanwire.exceptions import ComponentCreationError
from beanwire.types import ComponentType


class PropertyInjector:
    """
    Injects dependencies into a constructed instance through its setters.

    Each property name is also the id of the component injected into it. The
    mutator is looked up as ``set<Name>`` (first character upper-cased) or
    ``set_<name>``. Properties without a mutator are skipped.
    """

    def __init__(self, log_injections: bool = False) -> None:
        self._log_injections = log_injections
        self._logger = Logger(self.__class__.__name__)

    def inject(
        self,
        instance: Any,
        descriptor: ComponentDescriptor,
        component_type: ComponentType,
        resolve_ref: Callable[[str], Any],
        resolution_path: Optional[Sequence[str]] = None,
    ) -> List[str]:
        """
        Inject every property of a descriptor into an instance.

        Parameters
        ----------
        instance : Any
            Instance to populate
        descriptor : ComponentDescriptor
            Descriptor listing the property names
        component_type : ComponentType
            Type providing the setters
        resolve_ref : Callable[[str], Any]
            Resolves a component id to its instance
        resolution_path : Sequence[str], optional
            Ids currently being resolved, for error context

        Returns
        -------
        List[str]
            Names of the properties that were injected
        """
        injected = []

        for property_name in descriptor.property_refs:
            setter = component_type.find_setter(property_name)
            if setter is None:
                self._logger.debug(
                    f"No setter for property '{property_name}' on {component_type.name}, skipping"
                )
                continue

            dependency = resolve_ref(property_name)

            try:
                setter.apply(instance, dependency)
            except RecursionError:
                raise
            except Exception as e:
                raise ComponentCreationError(
                    f"Setter {component_type.name}.{setter.name} failed for component '{descriptor.id}'",
                    component_id=descriptor.id,
                    resolution_path=resolution_path,
                    original_error=e,
                ) from e

            if self._log_injections:
                self._logger.info(f"Injected '{property_name}' into '{descriptor.id}'")
            injected.append(property_name)

        return injected
