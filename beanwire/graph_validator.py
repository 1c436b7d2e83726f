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
Component graph validation.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from nautilus_trader.common.component import Logger

from beanwire.exceptions import (
    CircularDependencyError,
    ComponentNotFoundError,
    ConstructorResolutionError,
    TypeResolutionError,
)
from beanwire.registry import DescriptorRegistry
from beanwire.reporting import format_report
from beanwire.types import TypeRegistry


ERROR = "error"
WARNING = "warning"


@dataclass
class ValidationIssue:
    """Represents an issue found during component graph validation."""

    severity: str  # ERROR or WARNING
    component_id: str
    message: str
    suggestion: Optional[str] = None
    dependency_chain: List[str] = field(default_factory=list)


@dataclass
class ValidationResult:
    """Result of component graph validation."""

    is_valid: bool
    issues: List[ValidationIssue] = field(default_factory=list)
    components_validated: int = 0

    def issues_with(self, severity: str) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    def get_errors(self) -> List[ValidationIssue]:
        return self.issues_with(ERROR)

    def get_warnings(self) -> List[ValidationIssue]:
        return self.issues_with(WARNING)

    def has_errors(self) -> bool:
        return bool(self.get_errors())

    def has_warnings(self) -> bool:
        return bool(self.get_warnings())

    def format_report(self) -> str:
        """Format a human-readable validation report."""
        return format_report(
            "Component Graph Validation Report",
            [
                f"Components validated: {self.components_validated}",
                f"Overall status: {'PASS' if self.is_valid else 'FAIL'}",
            ],
            [
                (f"{severity.upper()}S", [
                    (issue.component_id, issue.message, issue.suggestion)
                    for issue in self.issues_with(severity)
                ])
                for severity in (ERROR, WARNING)
            ],
        )


class ComponentGraphValidator:
    """
    Validates the component graph for completeness and consistency.

    Performs a "dry run" of wiring without instantiating components to detect:
    - References to unregistered components
    - Unknown implementation types
    - Constructor arity mismatches
    - Circular dependencies
    - Properties without a matching setter (warning)
    """

    def __init__(self) -> None:
        """Initialize the graph validator."""
        self._logger = Logger(self.__class__.__name__)

    def validate(self, registry: DescriptorRegistry, types: TypeRegistry) -> ValidationResult:
        """
        Validate the component graph.

        Parameters
        ----------
        registry : DescriptorRegistry
            Descriptors to validate
        types : TypeRegistry
            Types the descriptors refer to

        Returns
        -------
        ValidationResult
            Validation result with issues and statistics
        """
        self._logger.info("Starting component graph validation")

        issues: List[ValidationIssue] = []
        validated: Set[str] = set()
        missing_setters: Set[Tuple[str, str]] = set()
        components_validated = 0

        for component_id in registry.ids():
            try:
                self._validate_component(registry, types, component_id, [], validated, missing_setters)
                components_validated += 1

            except CircularDependencyError as e:
                issues.append(ValidationIssue(
                    severity=ERROR,
                    component_id=component_id,
                    message=f"Circular dependency detected: {' -> '.join(e.cycle_path)}",
                    suggestion="Review and break the circular dependency chain",
                    dependency_chain=e.cycle_path,
                ))

            except ComponentNotFoundError as e:
                issues.append(ValidationIssue(
                    severity=ERROR,
                    component_id=component_id,
                    message=f"Reference to unregistered component '{e.component_id}'",
                    suggestion="Ensure all referenced components are defined",
                    dependency_chain=e.resolution_path,
                ))

            except ConstructorResolutionError as e:
                issues.append(ValidationIssue(
                    severity=ERROR,
                    component_id=component_id,
                    message=str(e).splitlines()[0],
                    suggestion="Declare a constructor taking that many arguments",
                    dependency_chain=e.resolution_path,
                ))

            except TypeResolutionError as e:
                issues.append(ValidationIssue(
                    severity=ERROR,
                    component_id=component_id,
                    message=f"Unknown implementation type '{e.type_name}'",
                    suggestion=e.suggestion,
                ))

        for component_id, property_name in sorted(missing_setters):
            issues.append(ValidationIssue(
                severity=WARNING,
                component_id=component_id,
                message=f"Property '{property_name}' has no setter and will not be injected",
                suggestion=f"Add a set_{property_name} method or remove the property",
            ))

        result = ValidationResult(
            is_valid=not any(issue.severity == ERROR for issue in issues),
            issues=issues,
            components_validated=components_validated,
        )

        self._logger.info(
            f"Validation complete: {components_validated} components, "
            f"{len(result.get_errors())} errors, "
            f"{len(result.get_warnings())} warnings"
        )

        return result

    def _validate_component(
        self,
        registry: DescriptorRegistry,
        types: TypeRegistry,
        component_id: str,
        path: List[str],
        validated: Set[str],
        missing_setters: Set[Tuple[str, str]],
    ) -> None:
        """
        Validate a single component and its dependencies.

        Components already proven valid are skipped.
        """
        if component_id in path:
            cycle_path = path[path.index(component_id):] + [component_id]
            raise CircularDependencyError(
                "Circular dependency detected during validation",
                cycle_path=cycle_path,
            )

        if component_id in validated:
            return

        descriptor = registry.lookup(component_id)
        if descriptor is None:
            raise ComponentNotFoundError(
                f"No component registered with id '{component_id}'",
                component_id=component_id,
                resolution_path=path,
            )

        component_type = types.resolve(descriptor.class_name, component_id)
        arg_count = len(descriptor.constructor_arg_refs)

        if component_type.find_constructor(arg_count) is None:
            raise ConstructorResolutionError(
                f"No constructor of {component_type.name} takes {arg_count} argument(s)",
                component_id=component_id,
                type_name=component_type.name,
                arity=arg_count,
                available_arities=[a for a in component_type.available_arities() if a is not None],
                resolution_path=path,
            )

        child_path = path + [component_id]

        for ref in descriptor.constructor_arg_refs:
            self._validate_component(registry, types, ref, child_path, validated, missing_setters)

        for property_name in descriptor.property_refs:
            if component_type.find_setter(property_name) is None:
                missing_setters.add((component_id, property_name))
                continue
            self._validate_component(registry, types, property_name, child_path, validated, missing_setters)

        validated.add(component_id)
