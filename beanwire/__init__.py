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
Identifier-based inversion-of-control container.

Features:
- Component definitions loaded from YAML, JSON or XML
- Constructor injection by positional references
- Setter injection where property names double as component ids
- Eager singleton materialization with cycle detection
"""

from beanwire.cache import SingletonCache
from beanwire.config import (
    ContextConfig,
    EagerConfig,
    LoggingConfig,
    TypeConfig,
    ValidationConfig,
)
from beanwire.constructor_resolver import ConstructorResolver
from beanwire.context import (
    ApplicationContext,
    ComponentFailure,
    MaterializationReport,
)
from beanwire.descriptor import ComponentDescriptor
from beanwire.exceptions import (
    CircularDependencyError,
    ComponentCreationError,
    ComponentNotFoundError,
    ConfigurationError,
    ConstructorResolutionError,
    ContainerError,
    ContextInitializationError,
    RegistryError,
    ResolutionDepthError,
    ResolutionError,
    TypeResolutionError,
)
from beanwire.graph_validator import (
    ComponentGraphValidator,
    ValidationIssue,
    ValidationResult,
)
from beanwire.loader import ConfigLoader
from beanwire.property_injector import PropertyInjector
from beanwire.registry import DescriptorRegistry
from beanwire.types import (
    ComponentType,
    Constructor,
    Setter,
    TypeRegistry,
    constructor,
)


__all__ = [
    # Context
    "ApplicationContext",
    "ComponentFailure",
    "MaterializationReport",
    # Building blocks
    "ComponentDescriptor",
    "DescriptorRegistry",
    "SingletonCache",
    "ConstructorResolver",
    "PropertyInjector",
    # Types
    "ComponentType",
    "Constructor",
    "Setter",
    "TypeRegistry",
    "constructor",
    # Loading and configuration
    "ConfigLoader",
    "ContextConfig",
    "EagerConfig",
    "LoggingConfig",
    "TypeConfig",
    "ValidationConfig",
    # Validation
    "ComponentGraphValidator",
    "ValidationIssue",
    "ValidationResult",
    # Errors
    "ContainerError",
    "ConfigurationError",
    "TypeResolutionError",
    "RegistryError",
    "ResolutionError",
    "ComponentNotFoundError",
    "ConstructorResolutionError",
    "ComponentCreationError",
    "CircularDependencyError",
    "ResolutionDepthError",
    "ContextInitializationError",
]
