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
Constructor selection and argument binding.
"""

from typing import Any, Callable, List, Optional, Sequence

from nautilus_trader.common.component import Logger

from beanwire.descriptor import ComponentDescriptor
from beanwire.exceptions import ComponentCreationError, ConstructorResolutionError
from beanwire.types import ComponentType, Constructor


class ConstructorResolver:
    """
    Selects a constructor for a descriptor and invokes it with resolved arguments.

    The first constructor, in declaration order, whose arity equals the number
    of constructor argument references is used. Parameter types are not
    considered. Each reference is resolved to a component and bound positionally.
    """

    def __init__(self) -> None:
        self._logger = Logger(self.__class__.__name__)

    def select(
        self,
        descriptor: ComponentDescriptor,
        component_type: ComponentType,
        resolution_path: Optional[Sequence[str]] = None,
    ) -> Constructor:
        """
        Select the constructor to use for a descriptor.

        Raises
        ------
        ConstructorResolutionError
            If no declared constructor accepts the number of references
        """
        arg_count = len(descriptor.constructor_arg_refs)
        selected = component_type.find_constructor(arg_count)

        if selected is None:
            raise ConstructorResolutionError(
                f"No constructor of {component_type.name} takes {arg_count} argument(s) "
                f"for component '{descriptor.id}'",
                component_id=descriptor.id,
                type_name=component_type.name,
                arity=arg_count,
                available_arities=[a for a in component_type.available_arities() if a is not None],
                resolution_path=resolution_path,
            )

        return selected

    def resolve_arguments(
        self,
        descriptor: ComponentDescriptor,
        resolve_ref: Callable[[str], Any],
    ) -> List[Any]:
        """Resolve each constructor reference, preserving positional order."""
        return [resolve_ref(ref) for ref in descriptor.constructor_arg_refs]

    def instantiate(
        self,
        descriptor: ComponentDescriptor,
        component_type: ComponentType,
        resolve_ref: Callable[[str], Any],
        resolution_path: Optional[Sequence[str]] = None,
    ) -> Any:
        """
        Build an instance for a descriptor.

        Descriptors without constructor references use the first zero-argument
        constructor.

        Parameters
        ----------
        descriptor : ComponentDescriptor
            Descriptor of the component to build
        component_type : ComponentType
            Resolved implementation type
        resolve_ref : Callable[[str], Any]
            Resolves a component id to its instance
        resolution_path : Sequence[str], optional
            Ids currently being resolved, for error context

        Returns
        -------
        Any
            The new instance
        """
        selected = self.select(descriptor, component_type, resolution_path)
        args = self.resolve_arguments(descriptor, resolve_ref)

        self._logger.debug(
            f"Constructing '{descriptor.id}' via {component_type.name}.{selected.name} "
            f"with {len(args)} argument(s)"
        )

        try:
            instance = selected(*args)
        except RecursionError:
            raise
        except Exception as e:
            raise ComponentCreationError(
                f"Constructor {component_type.name}.{selected.name} failed for component '{descriptor.id}'",
                component_id=descriptor.id,
                resolution_path=resolution_path,
                original_error=e,
            ) from e

        if instance is None:
            raise ComponentCreationError(
                f"Constructor {component_type.name}.{selected.name} returned None "
                f"for component '{descriptor.id}'",
                component_id=descriptor.id,
                resolution_path=resolution_path,
            )

        return instance
