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
Tests for the singleton cache.
"""

import threading
import time
from unittest.mock import Mock

import pytest

from beanwire.cache import SingletonCache
from beanwire.exceptions import ComponentCreationError


class TestSingletonCache:
    """Test get-or-create semantics and direct registration."""

    def setup_method(self):
        """Set up test fixtures."""
        self.cache = SingletonCache()

    def test_get_or_create_calls_factory_once(self):
        """Test that the factory runs only on the first access."""
        # Arrange
        factory = Mock(side_effect=lambda: object())

        # Act
        first = self.cache.get_or_create("dao", factory)
        second = self.cache.get_or_create("dao", factory)

        # Assert
        assert first is second
        assert factory.call_count == 1
        assert self.cache.contains("dao")
        assert self.cache.get("dao") is first

    def test_get_missing_returns_none(self):
        """Test that an unknown id has no cached instance."""
        assert self.cache.get("dao") is None
        assert not self.cache.contains("dao")
        assert len(self.cache) == 0

    def test_factory_returning_none_is_rejected(self):
        """Test that an absent instance is never cached."""
        with pytest.raises(ComponentCreationError) as exc_info:
            self.cache.get_or_create("dao", lambda: None)

        assert exc_info.value.component_id == "dao"
        assert not self.cache.contains("dao")

    def test_factory_error_leaves_no_entry(self):
        """Test that a failing factory does not populate the cache."""
        def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            self.cache.get_or_create("dao", failing)

        assert not self.cache.contains("dao")

    def test_factory_may_create_other_entries(self):
        """Test that a factory can recursively populate the cache."""
        def make_service():
            dao = self.cache.get_or_create("dao", object)
            return ("service", dao)

        service = self.cache.get_or_create("service", make_service)

        assert service[1] is self.cache.get("dao")
        assert self.cache.ids() == ["dao", "service"]

    def test_register_singleton_overwrites_with_warning(self):
        """Test that registering an existing id replaces it and warns."""
        # Arrange
        self.cache._logger = Mock()
        original = object()
        replacement = object()
        self.cache.register_singleton("dao", original)

        # Act
        self.cache.register_singleton("dao", replacement)

        # Assert
        assert self.cache.get("dao") is replacement
        assert self.cache._logger.warning.call_count == 1
        assert "dao" in self.cache._logger.warning.call_args[0][0]

    def test_register_singleton_first_time_does_not_warn(self):
        """Test that a fresh registration is silent."""
        self.cache._logger = Mock()

        self.cache.register_singleton("dao", object())

        self.cache._logger.warning.assert_not_called()

    def test_register_none_rejected(self):
        """Test that None cannot be registered as a singleton."""
        with pytest.raises(ComponentCreationError) as exc_info:
            self.cache.register_singleton("dao", None)

        assert exc_info.value.component_id == "dao"
        assert not self.cache.contains("dao")

    def test_concurrent_get_or_create_constructs_once(self):
        """Test that concurrent callers never duplicate construction."""
        # Arrange
        calls = []

        def slow_factory():
            calls.append(1)
            time.sleep(0.05)
            return object()

        results = []

        def worker():
            results.append(self.cache.get_or_create("dao", slow_factory))

        threads = [threading.Thread(target=worker) for _ in range(8)]

        # Act
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Assert
        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)
