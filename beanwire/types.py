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
Component types and the type registry.

A component type describes how instances of an implementation can be built
(an ordered list of constructors) and which one-argument mutators can receive
injected properties. Types are registered explicitly, either from a class
(introspected once at registration time) or from plain factory callables.
"""

import importlib
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from nautilus_trader.common.component import Logger

from beanwire.exceptions import ConfigurationError, TypeResolutionError


CONSTRUCTOR_MARKER = "__beanwire_constructor__"


def constructor(func: Callable) -> classmethod:
    """
    Mark a function as an alternative constructor of its class.

    The decorated function becomes a classmethod. Constructors are considered
    in definition order, with ``__init__`` taking its place among them.

    Example
    -------
    class OrderService:
        def __init__(self):
            self.dao = None

        @constructor
        def with_dao(cls, dao):
            service = cls()
            service.dao = dao
            return service
    """
    setattr(func, CONSTRUCTOR_MARKER, True)
    return classmethod(func)


def positional_arity(func: Callable, skip_first: bool = False) -> Optional[int]:
    """
    Count the positional parameters of a callable.

    Returns None when the callable accepts ``*args``, meaning any arity.
    """
    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        # Builtins without signature metadata
        return None

    if skip_first and params:
        params = params[1:]

    count = 0
    for param in params:
        if param.kind == param.VAR_POSITIONAL:
            return None
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def setter_names(property_name: str) -> Tuple[str, str]:
    """
    Mutator names accepted for a property.

    Only the first character is upper-cased: ``orderDao`` maps to ``setOrderDao``.
    """
    return (
        f"set{property_name[:1].upper()}{property_name[1:]}",
        f"set_{property_name}",
    )


@dataclass(frozen=True)
class Constructor:
    """A way of building an instance from positional arguments."""

    name: str
    func: Callable[..., Any]
    arity: Optional[int]

    def accepts(self, arg_count: int) -> bool:
        return self.arity is None or self.arity == arg_count

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)


@dataclass(frozen=True)
class Setter:
    """A one-argument mutator, invoked as ``func(instance, value)``."""

    name: str
    func: Callable[[Any, Any], Any]

    def apply(self, instance: Any, value: Any) -> None:
        self.func(instance, value)


@dataclass
class ComponentType:
    """Describes an implementation type: its constructors and setters, in declaration order."""

    name: str
    constructors: List[Constructor] = field(default_factory=list)
    setters: List[Setter] = field(default_factory=list)
    cls: Optional[Type] = None

    def __post_init__(self):
        if not self.constructors:
            raise ConfigurationError(f"Component type '{self.name}' must declare at least one constructor")

    @classmethod
    def from_class(cls, target: Type, name: Optional[str] = None) -> "ComponentType":
        """
        Build a component type by introspecting a class.

        Parameters
        ----------
        target : Type
            Class to describe
        name : str, optional
            Type name (defaults to ``module.QualName``)

        Returns
        -------
        ComponentType
        """
        if not inspect.isclass(target):
            raise TypeError(f"Expected a class, got {target!r}")

        return cls(
            name=name or qualified_name(target),
            constructors=_class_constructors(target),
            setters=_class_setters(target),
            cls=target,
        )

    def available_arities(self) -> List[Optional[int]]:
        return [c.arity for c in self.constructors]

    def find_constructor(self, arg_count: int) -> Optional[Constructor]:
        """First declared constructor accepting ``arg_count`` positional arguments."""
        for candidate in self.constructors:
            if candidate.accepts(arg_count):
                return candidate
        return None

    def find_setter(self, property_name: str) -> Optional[Setter]:
        """First declared setter matching the property's mutator names."""
        names = setter_names(property_name)
        for setter in self.setters:
            if setter.name in names:
                return setter
        return None


def qualified_name(target: Type) -> str:
    return f"{target.__module__}.{target.__qualname__}"


def _class_constructors(target: Type) -> List[Constructor]:
    constructors: List[Constructor] = []
    seen = set()

    init_declared = False
    for klass in target.__mro__:
        if klass is object:
            break
        for attr_name, value in vars(klass).items():
            if attr_name in seen:
                continue
            if attr_name == "__init__" and not init_declared:
                init_declared = True
                seen.add(attr_name)
                constructors.append(Constructor("__init__", target, positional_arity(value, skip_first=True)))
            elif isinstance(value, classmethod) and getattr(value.__func__, CONSTRUCTOR_MARKER, False):
                seen.add(attr_name)
                constructors.append(
                    Constructor(
                        attr_name,
                        getattr(target, attr_name),
                        positional_arity(value.__func__, skip_first=True),
                    )
                )

    # No __init__ anywhere in the hierarchy: plain default construction first
    if not init_declared:
        constructors.insert(0, Constructor("__init__", target, 0))

    return constructors


def _class_setters(target: Type) -> List[Setter]:
    setters: List[Setter] = []
    seen = set()

    for klass in target.__mro__:
        if klass is object:
            break
        for attr_name, value in vars(klass).items():
            if attr_name in seen or not inspect.isfunction(value):
                continue
            if not _looks_like_setter(attr_name):
                continue
            if positional_arity(value, skip_first=True) != 1:
                continue
            seen.add(attr_name)
            setters.append(Setter(attr_name, value))

    return setters


def _looks_like_setter(attr_name: str) -> bool:
    if attr_name.startswith("set_"):
        return len(attr_name) > 4
    return attr_name.startswith("set") and len(attr_name) > 3 and not attr_name[3].islower()


class TypeRegistry:
    """
    Registry mapping type names to component types.

    Passed explicitly to the application context. Unknown names can optionally
    be imported from their dotted path on first use.
    """

    def __init__(
        self,
        allow_imports: bool = False,
        trusted_prefixes: Optional[Sequence[str]] = None,
    ) -> None:
        """
        Initialize type registry.

        Parameters
        ----------
        allow_imports : bool
            If True, unknown dotted names are imported on first resolution
        trusted_prefixes : Sequence[str], optional
            Module prefixes allowed for imports. Any module if empty.
        """
        self._types: Dict[str, ComponentType] = {}
        self._allow_imports = allow_imports
        self._trusted_prefixes = list(trusted_prefixes or [])
        self._loaded_modules: Dict[str, Any] = {}
        self._logger = Logger(self.__class__.__name__)

    @classmethod
    def of(cls, *classes: Type, **kwargs: Any) -> "TypeRegistry":
        """Create a registry with the given classes registered."""
        registry = cls(**kwargs)
        for target in classes:
            registry.register_class(target)
        return registry

    def register(self, component_type: ComponentType, aliases: Iterable[str] = ()) -> ComponentType:
        """
        Register a component type under its name and any aliases.

        Aliases never replace a different type already registered under that name.
        """
        self._types[component_type.name] = component_type
        for alias in aliases:
            existing = self._types.get(alias)
            if existing is not None and existing is not component_type:
                self._logger.debug(f"Alias '{alias}' already bound to {existing.name}, skipping")
                continue
            self._types[alias] = component_type

        self._logger.debug(
            f"Registered type {component_type.name} with "
            f"{len(component_type.constructors)} constructor(s) and "
            f"{len(component_type.setters)} setter(s)"
        )
        return component_type

    def register_class(self, target: Type, name: Optional[str] = None) -> ComponentType:
        """Register a class, also aliased by its bare class name."""
        component_type = ComponentType.from_class(target, name)
        aliases = [qualified_name(target), target.__name__]
        return self.register(component_type, [a for a in aliases if a != component_type.name])

    def register_factory(
        self,
        name: str,
        factory: Callable[..., Any],
        setters: Optional[Sequence[Tuple[str, Callable[[Any, Any], Any]]]] = None,
        arity: Optional[int] = None,
    ) -> ComponentType:
        """
        Register a factory callable as the sole constructor of a type.

        Parameters
        ----------
        name : str
            Type name referenced by component definitions
        factory : Callable
            Builds an instance from positional arguments
        setters : Sequence[Tuple[str, Callable]], optional
            Mutators as ``(method name, func(instance, value))`` pairs
        arity : int, optional
            Argument count (derived from the factory signature if omitted)
        """
        if arity is None:
            arity = positional_arity(factory)

        component_type = ComponentType(
            name=name,
            constructors=[Constructor(getattr(factory, "__name__", name), factory, arity)],
            setters=[Setter(setter_name, func) for setter_name, func in (setters or [])],
        )
        return self.register(component_type)

    def resolve(self, name: str, component_id: Optional[str] = None) -> ComponentType:
        """
        Resolve a type by name.

        Raises
        ------
        TypeResolutionError
            If the type is unknown and cannot be imported
        """
        component_type = self._types.get(name)
        if component_type is not None:
            return component_type

        if not self._allow_imports:
            raise TypeResolutionError(
                f"Unknown component type '{name}'",
                type_name=name,
                component_id=component_id,
                suggestion="Register the type with TypeRegistry.register_class or enable imports",
            )

        return self._import_type(name, component_id)

    def names(self) -> List[str]:
        return list(self._types.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def _import_type(self, name: str, component_id: Optional[str]) -> ComponentType:
        if "." not in name:
            raise TypeResolutionError(
                f"Cannot import '{name}': not a dotted path",
                type_name=name,
                component_id=component_id,
                suggestion="Use the fully-qualified 'package.module.Class' name",
            )

        if self._trusted_prefixes and not any(name.startswith(p) for p in self._trusted_prefixes):
            raise TypeResolutionError(
                f"Type '{name}' is outside the trusted module prefixes",
                type_name=name,
                component_id=component_id,
                suggestion=f"Add its package to trusted prefixes: {self._trusted_prefixes}",
            )

        try:
            module_path, attr_name = name.rsplit(".", 1)
            module = self._get_module(module_path)
            target = getattr(module, attr_name)
        except (ImportError, AttributeError) as e:
            raise TypeResolutionError(
                f"Failed to import component type '{name}'",
                type_name=name,
                component_id=component_id,
                suggestion="Check that the class path is correct and the module is importable",
            ) from e

        if inspect.isclass(target):
            component_type = ComponentType.from_class(target, name)
            self.register(component_type)
        elif callable(target):
            component_type = self.register_factory(name, target)
        else:
            raise TypeResolutionError(
                f"'{name}' is neither a class nor a callable",
                type_name=name,
                component_id=component_id,
            )

        self._logger.info(f"Imported component type {name}")
        return component_type

    def _get_module(self, module_path: str) -> Any:
        """Get module, using cache for efficiency."""
        if module_path not in self._loaded_modules:
            self._loaded_modules[module_path] = importlib.import_module(module_path)
        return self._loaded_modules[module_path]
