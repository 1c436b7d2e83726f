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
Tests for setter-based property injection.
"""

import pytest

from beanwire.descriptor import ComponentDescriptor
from beanwire.exceptions import ComponentCreationError
from beanwire.property_injector import PropertyInjector
from beanwire.types import ComponentType


class OrderService:
    def __init__(self):
        self.itemDao = None
        self.account_dao = None

    def setItemDao(self, item_dao):
        self.itemDao = item_dao

    def set_account_dao(self, account_dao):
        self.account_dao = account_dao


class StrictService:
    def set_dao(self, dao):
        raise ValueError("dao rejected")


class TestPropertyInjector:
    """Test injection of property references through setters."""

    def setup_method(self):
        """Set up test fixtures."""
        self.injector = PropertyInjector()
        self.components = {"itemDao": "items", "account_dao": "accounts", "dao": "dao"}
        self.resolved = []

    def resolve_ref(self, ref):
        self.resolved.append(ref)
        return self.components[ref]

    def test_properties_injected_through_setters(self):
        """Test that each property is resolved by its own name and set."""
        # Arrange
        component_type = ComponentType.from_class(OrderService)
        descriptor = ComponentDescriptor.create(
            "service", "OrderService", properties=["itemDao", "account_dao"],
        )
        service = OrderService()

        # Act
        injected = self.injector.inject(service, descriptor, component_type, self.resolve_ref)

        # Assert
        assert injected == ["itemDao", "account_dao"]
        assert self.resolved == ["itemDao", "account_dao"]
        assert service.itemDao == "items"
        assert service.account_dao == "accounts"

    def test_property_without_setter_skipped(self):
        """Test that a property with no setter is ignored and never resolved."""
        # Arrange
        component_type = ComponentType.from_class(OrderService)
        descriptor = ComponentDescriptor.create(
            "service", "OrderService", properties=["unknown", "itemDao"],
        )
        service = OrderService()

        # Act
        injected = self.injector.inject(service, descriptor, component_type, self.resolve_ref)

        # Assert
        assert injected == ["itemDao"]
        assert "unknown" not in self.resolved

    def test_no_properties_is_noop(self):
        """Test that a descriptor without properties injects nothing."""
        component_type = ComponentType.from_class(OrderService)
        descriptor = ComponentDescriptor.create("service", "OrderService")

        assert self.injector.inject(OrderService(), descriptor, component_type, self.resolve_ref) == []
        assert self.resolved == []

    def test_setter_failure_wrapped(self):
        """Test that exceptions raised by setters surface as creation errors."""
        # Arrange
        component_type = ComponentType.from_class(StrictService)
        descriptor = ComponentDescriptor.create("strict", "StrictService", properties=["dao"])

        # Act & Assert
        with pytest.raises(ComponentCreationError) as exc_info:
            self.injector.inject(StrictService(), descriptor, component_type, self.resolve_ref)

        assert exc_info.value.component_id == "strict"
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_resolution_errors_propagate_unchanged(self):
        """Test that failures resolving a dependency are not re-wrapped."""
        component_type = ComponentType.from_class(OrderService)
        descriptor = ComponentDescriptor.create("service", "OrderService", properties=["itemDao"])

        def failing_resolve(ref):
            raise LookupError(ref)

        with pytest.raises(LookupError):
            self.injector.inject(OrderService(), descriptor, component_type, failing_resolve)
