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
Container exceptions.
"""

from typing import TYPE_CHECKING, Any, List, Optional, Sequence

if TYPE_CHECKING:
    from beanwire.context import MaterializationReport


class ContainerError(Exception):
    """
    Base exception for all container errors.

    This is the root exception type for all wiring failures.
    """
    pass


class ConfigurationError(ContainerError):
    """
    Exception raised when component definitions or container settings are invalid.

    This includes:
    - Unreadable or malformed definition files
    - Definitions missing an id or class
    - Invalid container configuration
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        component_id: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.component_id = component_id
        self.suggestion = suggestion

    def __str__(self) -> str:
        parts = [super().__str__()]

        if self.source:
            parts.append(f"Source: {self.source}")

        if self.component_id:
            parts.append(f"Component: {self.component_id}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)


class TypeResolutionError(ConfigurationError):
    """
    Exception raised when an implementation type name cannot be resolved.
    """

    def __init__(
        self,
        message: str,
        type_name: str,
        component_id: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        super().__init__(message, component_id=component_id, suggestion=suggestion)
        self.type_name = type_name


class RegistryError(ContainerError):
    """
    Exception raised when the descriptor registry is modified after it was sealed.
    """

    def __init__(self, message: str, component_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.component_id = component_id


class ResolutionError(ContainerError):
    """
    Base exception for failures while resolving a component at runtime.

    Carries the identifier being resolved and the resolution path that led to it.
    """

    def __init__(
        self,
        message: str,
        component_id: Optional[str] = None,
        resolution_path: Optional[Sequence[str]] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.component_id = component_id
        self.resolution_path: List[str] = list(resolution_path or [])
        self.original_error = original_error

    def __str__(self) -> str:
        parts = [super().__str__()]

        if self.component_id:
            parts.append(f"Component: {self.component_id}")

        if self.resolution_path:
            parts.append(f"Resolution path: {' -> '.join(self.resolution_path)}")

        if self.original_error:
            parts.append(f"Original error: {self.original_error!r}")

        return "\n".join(parts)


class ComponentNotFoundError(ResolutionError):
    """
    Exception raised when a component id has no registered descriptor.
    """
    pass


class ConstructorResolutionError(ResolutionError):
    """
    Exception raised when no constructor matches the number of declared arguments.
    """

    def __init__(
        self,
        message: str,
        component_id: Optional[str] = None,
        type_name: Optional[str] = None,
        arity: Optional[int] = None,
        available_arities: Optional[Sequence[int]] = None,
        resolution_path: Optional[Sequence[str]] = None,
    ) -> None:
        super().__init__(message, component_id=component_id, resolution_path=resolution_path)
        self.type_name = type_name
        self.arity = arity
        self.available_arities: List[int] = list(available_arities or [])

    def __str__(self) -> str:
        parts = [super().__str__()]

        if self.type_name:
            parts.append(f"Type: {self.type_name}")

        if self.arity is not None:
            available = ", ".join(str(a) for a in self.available_arities) or "none"
            parts.append(f"Requested arity: {self.arity} (available: {available})")

        return "\n".join(parts)


class ComponentCreationError(ResolutionError):
    """
    Exception raised when a constructor or property mutator fails.

    The underlying exception is kept on ``original_error`` and chained as the cause.
    """
    pass


class CircularDependencyError(ResolutionError):
    """
    Exception raised when circular dependencies are detected.

    This prevents infinite recursion during component resolution.
    """

    def __init__(
        self,
        message: str,
        cycle_path: Optional[Sequence[str]] = None,
    ) -> None:
        cycle = list(cycle_path or [])
        super().__init__(message, component_id=cycle[-1] if cycle else None)
        self.cycle_path = cycle

    def __str__(self) -> str:
        if self.cycle_path:
            return f"{ContainerError.__str__(self)}\nCycle: {' -> '.join(self.cycle_path)}"
        return ContainerError.__str__(self)


class ResolutionDepthError(ResolutionError):
    """
    Exception raised when a resolution path grows past the configured maximum depth.
    """

    def __init__(
        self,
        message: str,
        max_depth: int,
        resolution_path: Optional[Sequence[str]] = None,
    ) -> None:
        path = list(resolution_path or [])
        super().__init__(
            message,
            component_id=path[-1] if path else None,
            resolution_path=path,
        )
        self.max_depth = max_depth


class ContextInitializationError(ContainerError):
    """
    Exception raised when eager materialization of the context fails.

    The full report of created and failed components is attached as ``report``.
    """

    def __init__(self, message: str, report: "MaterializationReport") -> None:
        super().__init__(message)
        self.report = report

    @property
    def failures(self) -> Any:
        return self.report.failures

    def __str__(self) -> str:
        return f"{super().__str__()}\n{self.report.format_report()}"
