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
Singleton instance cache.
"""

import threading
from typing import Any, Callable, Dict, List, Optional

from nautilus_trader.common.component import Logger

from beanwire.exceptions import ComponentCreationError


class SingletonCache:
    """
    Cache of constructed component instances keyed by component id.

    Holds at most one instance per id for the lifetime of the cache. There is
    no eviction and no expiry.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}
        # Re-entrant so that a factory may resolve its own dependencies
        self._lock = threading.RLock()
        self._logger = Logger(self.__class__.__name__)

    def get(self, component_id: str) -> Optional[Any]:
        """Get cached instance, or None if not yet created."""
        return self._instances.get(component_id)

    def contains(self, component_id: str) -> bool:
        return component_id in self._instances

    def get_or_create(self, component_id: str, factory: Callable[[], Any]) -> Any:
        """
        Get the cached instance, creating it with ``factory`` on first access.

        Parameters
        ----------
        component_id : str
            Id to cache the instance under
        factory : Callable[[], Any]
            Zero-argument callable building the instance

        Returns
        -------
        Any
            The cached instance

        Raises
        ------
        ComponentCreationError
            If the factory returns None
        """
        instance = self._instances.get(component_id)
        if instance is None:
            with self._lock:
                # Double-check pattern
                instance = self._instances.get(component_id)
                if instance is None:
                    instance = factory()
                    if instance is None:
                        raise ComponentCreationError(
                            f"Factory for '{component_id}' produced no instance",
                            component_id=component_id,
                        )
                    self._instances[component_id] = instance
        return instance

    def register_singleton(self, component_id: str, instance: Any) -> None:
        """
        Store an instance directly, replacing any existing one.

        Replacing an existing instance is allowed but logged as a warning.
        """
        if instance is None:
            raise ComponentCreationError(
                f"Cannot register None as singleton '{component_id}'",
                component_id=component_id,
            )

        with self._lock:
            existing = self._instances.get(component_id)
            if existing is not None:
                self._logger.warning(
                    f"Singleton '{component_id}' already registered ({existing!r}), overwriting"
                )
            self._instances[component_id] = instance

    def ids(self) -> List[str]:
        return list(self._instances.keys())

    def __len__(self) -> int:
        return len(self._instances)
