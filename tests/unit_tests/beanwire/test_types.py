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
Tests for component types and the type registry.
"""

import pytest

from beanwire.exceptions import TypeResolutionError
from beanwire.types import ComponentType, TypeRegistry, constructor, setter_names


class Plain:
    """Class without an __init__."""
    pass


class Repository:
    """Class with alternative constructors and setters."""

    def __init__(self):
        self.source = None
        self.orderDao = None
        self.cache = None

    @constructor
    def from_source(cls, source):
        repository = cls()
        repository.source = source
        return repository

    @constructor
    def from_pair(cls, source, cache):
        repository = cls.from_source(source)
        repository.cache = cache
        return repository

    def setOrderDao(self, order_dao):
        self.orderDao = order_dao

    def set_cache(self, cache):
        self.cache = cache

    def settle(self, amount):
        """Not a setter: lowercase after 'set'."""

    def set_many(self, a, b):
        """Not a setter: two arguments."""


class DerivedRepository(Repository):
    """Subclass inheriting constructors and setters."""

    def set_cache(self, cache):
        self.cache = ("derived", cache)


class Auditor:
    def __init__(self, sink=None):
        self.sink = sink


class TestComponentTypeFromClass:
    """Test introspection of classes into component types."""

    def test_class_without_init_has_default_constructor(self):
        """Test that a class with no __init__ gets a zero-argument constructor."""
        component_type = ComponentType.from_class(Plain)

        assert component_type.available_arities() == [0]
        assert isinstance(component_type.find_constructor(0)(), Plain)

    def test_constructors_in_declaration_order(self):
        """Test that __init__ and marked class methods are listed in definition order."""
        component_type = ComponentType.from_class(Repository)

        assert [c.name for c in component_type.constructors] == ["__init__", "from_source", "from_pair"]
        assert component_type.available_arities() == [0, 1, 2]

    def test_alternative_constructor_builds_instance(self):
        """Test that an alternative constructor is invoked with positional args."""
        component_type = ComponentType.from_class(Repository)

        instance = component_type.find_constructor(2)("db", "lru")

        assert isinstance(instance, Repository)
        assert instance.source == "db"
        assert instance.cache == "lru"

    def test_setters_detected(self):
        """Test that only one-argument set* methods are setters."""
        component_type = ComponentType.from_class(Repository)

        names = [s.name for s in component_type.setters]
        assert names == ["setOrderDao", "set_cache"]

    def test_find_setter_capitalises_first_character_only(self):
        """Test that orderDao maps to setOrderDao, not setOrderdao."""
        component_type = ComponentType.from_class(Repository)

        assert component_type.find_setter("orderDao").name == "setOrderDao"
        assert component_type.find_setter("cache").name == "set_cache"
        assert component_type.find_setter("missing") is None

    def test_setter_names(self):
        """Test both accepted mutator spellings."""
        assert setter_names("orderDao") == ("setOrderDao", "set_orderDao")

    def test_subclass_override_wins(self):
        """Test that an overriding setter on a subclass is used."""
        component_type = ComponentType.from_class(DerivedRepository)
        instance = DerivedRepository()

        component_type.find_setter("cache").apply(instance, "lru")

        assert instance.cache == ("derived", "lru")
        assert component_type.available_arities() == [0, 1, 2]

    def test_default_arguments_count_towards_arity(self):
        """Test that parameters with defaults still count."""
        component_type = ComponentType.from_class(Auditor)

        assert component_type.available_arities() == [1]

    def test_requires_a_class(self):
        """Test that non-classes are rejected."""
        with pytest.raises(TypeError):
            ComponentType.from_class(lambda: None)


class TestTypeRegistry:
    """Test type registration and resolution."""

    def setup_method(self):
        """Set up test fixtures."""
        self.types = TypeRegistry()

    def test_register_class_with_aliases(self):
        """Test that a class resolves by qualified and bare name."""
        component_type = self.types.register_class(Repository)

        assert self.types.resolve(f"{__name__}.Repository") is component_type
        assert self.types.resolve("Repository") is component_type

    def test_register_class_with_custom_name(self):
        """Test that a custom name is honoured."""
        component_type = self.types.register_class(Auditor, name="audit.Auditor")

        assert component_type.name == "audit.Auditor"
        assert self.types.resolve("audit.Auditor") is component_type
        assert self.types.resolve("Auditor") is component_type

    def test_alias_does_not_replace_other_type(self):
        """Test that a bare-name alias never shadows a different type."""
        first = self.types.register_class(Auditor)
        second = self.types.register_class(Auditor, name="other.Auditor")

        assert self.types.resolve("Auditor") is first
        assert self.types.resolve("other.Auditor") is second

    def test_register_factory(self):
        """Test that a factory becomes the only constructor of a type."""
        # Arrange
        def make_pool(url, size):
            return {"url": url, "size": size}

        # Act
        component_type = self.types.register_factory(
            "Pool",
            make_pool,
            setters=[("set_timeout", lambda pool, value: pool.update(timeout=value))],
        )

        # Assert
        assert component_type.available_arities() == [2]
        pool = component_type.find_constructor(2)("db://", 4)
        component_type.find_setter("timeout").apply(pool, 30)
        assert pool == {"url": "db://", "size": 4, "timeout": 30}

    def test_variadic_factory_accepts_any_arity(self):
        """Test that a *args factory matches any argument count."""
        component_type = self.types.register_factory("Bag", lambda *items: list(items))

        assert component_type.find_constructor(0)() == []
        assert component_type.find_constructor(3)(1, 2, 3) == [1, 2, 3]

    def test_unknown_type_raises(self):
        """Test that resolving an unknown name fails with the name attached."""
        with pytest.raises(TypeResolutionError) as exc_info:
            self.types.resolve("app.Missing", component_id="svc")

        assert exc_info.value.type_name == "app.Missing"
        assert exc_info.value.component_id == "svc"

    def test_import_unknown_type_when_allowed(self):
        """Test that dotted names are imported when imports are enabled."""
        types = TypeRegistry(allow_imports=True)

        component_type = types.resolve(f"{__name__}.Auditor")

        assert component_type.cls is Auditor
        assert f"{__name__}.Auditor" in types

    def test_import_missing_module_raises(self):
        """Test that an unimportable path is reported as a type error."""
        types = TypeRegistry(allow_imports=True)

        with pytest.raises(TypeResolutionError) as exc_info:
            types.resolve("beanwire_no_such_module.Thing")

        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_import_outside_trusted_prefix_rejected(self):
        """Test that trusted prefixes restrict importable modules."""
        types = TypeRegistry(allow_imports=True, trusted_prefixes=["app."])

        with pytest.raises(TypeResolutionError, match="trusted"):
            types.resolve(f"{__name__}.Auditor")

    def test_of_registers_classes(self):
        """Test the convenience constructor."""
        types = TypeRegistry.of(Plain, Auditor)

        assert "Plain" in types
        assert "Auditor" in types
