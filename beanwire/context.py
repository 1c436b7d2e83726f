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
Application context: builds, wires and caches the component graph.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from nautilus_trader.common.component import Logger

from beanwire.cache import SingletonCache
from beanwire.config import ContextConfig
from beanwire.constructor_resolver import ConstructorResolver
from beanwire.descriptor import ComponentDescriptor
from beanwire.exceptions import (
    CircularDependencyError,
    ComponentNotFoundError,
    ConfigurationError,
    ContainerError,
    ContextInitializationError,
    ResolutionDepthError,
)
from beanwire.graph_validator import ComponentGraphValidator
from beanwire.loader import ConfigLoader
from beanwire.property_injector import PropertyInjector
from beanwire.registry import DescriptorRegistry
from beanwire.reporting import format_report
from beanwire.types import TypeRegistry


@dataclass
class ComponentFailure:
    """A component that could not be materialized."""

    component_id: str
    error: ContainerError


@dataclass
class MaterializationReport:
    """Outcome of eagerly materializing every registered component."""

    created: List[str] = field(default_factory=list)
    failures: List[ComponentFailure] = field(default_factory=list)

    @property
    def is_successful(self) -> bool:
        return not self.failures

    def failed_ids(self) -> List[str]:
        return [failure.component_id for failure in self.failures]

    def format_report(self) -> str:
        """Format a human-readable materialization report."""
        entries = [
            (
                failure.component_id,
                f"{type(failure.error).__name__}: {str(failure.error).splitlines()[0]}",
                getattr(failure.error, "suggestion", None),
            )
            for failure in self.failures
        ]
        return format_report(
            "Component Materialization Report",
            [
                f"Components created: {len(self.created)}",
                f"Components failed: {len(self.failures)}",
            ],
            [("FAILURES", entries)],
        )


class ApplicationContext:
    """
    Inversion-of-control context.

    Holds the descriptor registry and the singleton cache, and on construction
    eagerly builds every registered component. Dependencies are resolved by
    component id: constructor argument references are bound positionally and
    property references are injected through setters. Building is depth-first,
    so a component's dependencies always exist before it does.
    """

    def __init__(
        self,
        descriptors: Iterable[ComponentDescriptor] = (),
        types: Optional[TypeRegistry] = None,
        config: Optional[ContextConfig] = None,
    ) -> None:
        """
        Initialize and eagerly materialize the context.

        Parameters
        ----------
        descriptors : Iterable[ComponentDescriptor]
            Component descriptors, in registration order
        types : TypeRegistry, optional
            Implementation types referenced by the descriptors
        config : ContextConfig, optional
            Context configuration. Defaults to ``ContextConfig.from_environment()``

        Raises
        ------
        ConfigurationError
            If the configuration or the component graph is invalid
        ContextInitializationError
            If any component fails to build and ``eager.fail_on_error`` is set
        """
        self._config = config if config is not None else ContextConfig.from_environment()
        self._logger = Logger(self.__class__.__name__)

        errors = self._config.validate()
        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}",
                suggestion="Review and fix configuration errors",
            )

        if types is None:
            types = TypeRegistry(
                allow_imports=self._config.types.allow_imports,
                trusted_prefixes=self._config.types.trusted_prefixes,
            )
        self._types = types
        self._registry = DescriptorRegistry(descriptors)
        self._cache = SingletonCache()
        self._constructor_resolver = ConstructorResolver()
        self._property_injector = PropertyInjector(
            log_injections=self._config.logging.log_property_injection,
        )
        self._report: Optional[MaterializationReport] = None
        self._active = False

        self._refresh()

    @classmethod
    def from_file(
        cls,
        definitions_path: Union[str, Path],
        types: Optional[TypeRegistry] = None,
        config: Optional[ContextConfig] = None,
        loader: Optional[ConfigLoader] = None,
    ) -> "ApplicationContext":
        """
        Create a context from a component definition file.

        Parameters
        ----------
        definitions_path : str or Path
            YAML, JSON or XML component definitions
        types : TypeRegistry, optional
            Implementation types referenced by the definitions
        config : ContextConfig, optional
            Context configuration
        loader : ConfigLoader, optional
            Loader to parse the definitions with
        """
        descriptors = (loader or ConfigLoader()).load(definitions_path)
        return cls(descriptors, types=types, config=config)

    def get_component(self, component_id: str, _resolution_path: Optional[Sequence[str]] = None) -> Any:
        """
        Get a component, building it and its dependencies on first access.

        Parameters
        ----------
        component_id : str
            Id of the component
        _resolution_path : Sequence[str], optional
            Internal parameter tracking the ids being resolved, for cycle detection

        Returns
        -------
        Any
            The singleton instance

        Raises
        ------
        ComponentNotFoundError
            If no component is registered under the id
        CircularDependencyError
            If the id is already being resolved on this path
        ResolutionDepthError
            If cycle detection is disabled and the resolution path exceeds the
            configured maximum depth, or if the graph is too deep for the
            interpreter's recursion limit
        """
        # Directly registered singletons need no descriptor
        instance = self._cache.get(component_id)
        if instance is not None:
            return instance

        path = list(_resolution_path or [])

        descriptor = self._registry.lookup(component_id)
        if descriptor is None:
            raise ComponentNotFoundError(
                f"No component registered with id '{component_id}'",
                component_id=component_id,
                resolution_path=path,
            )

        validation = self._config.validation
        if validation.enable_circular_detection:
            if component_id in path:
                cycle_path = path[path.index(component_id):] + [component_id]
                raise CircularDependencyError(
                    f"Circular dependency detected: {' -> '.join(cycle_path)}",
                    cycle_path=cycle_path,
                )
        elif len(path) >= validation.max_resolution_depth:
            raise ResolutionDepthError(
                f"Resolution of '{component_id}' exceeded maximum depth {validation.max_resolution_depth}",
                max_depth=validation.max_resolution_depth,
                resolution_path=path + [component_id],
            )

        path.append(component_id)
        try:
            return self._cache.get_or_create(
                component_id,
                lambda: self._create_component(descriptor, path),
            )
        except RecursionError as e:
            # Only the outermost call converts, once the stack has unwound
            if _resolution_path is not None:
                raise
            raise ResolutionDepthError(
                f"Resolution of '{component_id}' exceeded the interpreter recursion limit",
                max_depth=validation.max_resolution_depth,
                resolution_path=path,
            ) from e

    def register_singleton(self, component_id: str, instance: Any) -> None:
        """
        Register an instance directly, bypassing construction.

        An existing instance for the id is replaced, with a warning.
        """
        self._cache.register_singleton(component_id, instance)

    def contains_component(self, component_id: str) -> bool:
        """Check if a component is registered or was registered directly."""
        return component_id in self._registry or self._cache.contains(component_id)

    def get_descriptor(self, component_id: str) -> ComponentDescriptor:
        """Get the descriptor of a registered component."""
        return self._registry.get(component_id)

    def component_ids(self) -> List[str]:
        """List registered component ids in registration order."""
        return self._registry.ids()

    def singleton_ids(self) -> List[str]:
        """List ids of components built or registered so far."""
        return self._cache.ids()

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def report(self) -> Optional[MaterializationReport]:
        """Report of the eager materialization, if it ran."""
        return self._report

    @property
    def config(self) -> ContextConfig:
        return self._config

    def _refresh(self) -> None:
        if self._config.validation.enable_graph_validation:
            result = ComponentGraphValidator().validate(self._registry, self._types)
            if not result.is_valid:
                raise ConfigurationError(
                    f"Component graph validation failed:\n{result.format_report()}",
                    suggestion="Fix the reported component definitions",
                )

        # Descriptors are read-only from here on
        self._registry.seal()

        if self._config.eager.enabled:
            self._report = self._materialize()
            if not self._report.is_successful and self._config.eager.fail_on_error:
                raise ContextInitializationError(
                    f"Failed to initialize context '{self._config.context_name}': "
                    f"{len(self._report.failures)} component(s) could not be created",
                    report=self._report,
                )

        self._active = True

    def _materialize(self) -> MaterializationReport:
        report = MaterializationReport()

        for component_id in self._registry.ids():
            try:
                self.get_component(component_id)
                report.created.append(component_id)
            except ContainerError as e:
                self._logger.error(f"Failed to create component '{component_id}': {e}")
                report.failures.append(ComponentFailure(component_id, e))

        self._logger.info(
            f"Context '{self._config.context_name}' materialized: "
            f"{len(report.created)} created, {len(report.failures)} failed"
        )
        return report

    def _create_component(self, descriptor: ComponentDescriptor, path: List[str]) -> Any:
        component_type = self._types.resolve(descriptor.class_name, descriptor.id)

        def resolve_ref(ref: str) -> Any:
            return self.get_component(ref, path)

        instance = self._constructor_resolver.instantiate(descriptor, component_type, resolve_ref, path)
        self._property_injector.inject(instance, descriptor, component_type, resolve_ref, path)

        if self._config.logging.log_component_creation:
            self._logger.info(f"Created component '{descriptor.id}' ({component_type.name})")

        return instance
