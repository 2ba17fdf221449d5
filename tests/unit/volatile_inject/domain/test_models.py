"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from volatile_inject.domain import Binding, BindingRegistry, Lifetime, LifetimeError


class TestBinding:
    """Test cases for the Binding model."""

    def test_binding_creation(self):
        """Test creating a binding with an explicit lifetime."""
        factory = lambda i: object()  # noqa: E731
        binding = Binding(lifetime=Lifetime.SINGLETON, factory=factory)

        assert binding.lifetime is Lifetime.SINGLETON
        assert binding.factory is factory

    def test_binding_accepts_lifetime_string(self):
        """Test that lifetime values are coerced from strings."""
        binding = Binding(lifetime="volatile", factory=lambda i: None)
        assert binding.lifetime is Lifetime.VOLATILE

    def test_binding_rejects_unknown_lifetime(self):
        """Test that an unknown lifetime raises LifetimeError."""
        with pytest.raises(LifetimeError):
            Binding(lifetime="scoped", factory=lambda i: None)

    def test_binding_rejects_non_callable_factory(self):
        """Test that the factory must be callable."""
        with pytest.raises(ValidationError):
            Binding(lifetime=Lifetime.TRANSIENT, factory="not callable")

    def test_binding_is_frozen(self):
        """Test that bindings are immutable."""
        binding = Binding.prototype(lambda i: None)
        with pytest.raises(ValidationError):
            binding.lifetime = Lifetime.SINGLETON

    def test_constructors(self):
        """Test the per-lifetime constructors."""
        assert Binding.singleton(lambda i: 1).lifetime is Lifetime.SINGLETON
        assert Binding.prototype(lambda i: 1).lifetime is Lifetime.TRANSIENT
        assert Binding.volatile(lambda i: 1).lifetime is Lifetime.VOLATILE

    def test_value_binding_ignores_injector(self):
        """Test that value bindings return the value for any injector."""
        value = object()
        binding = Binding.value(value)

        assert binding.lifetime is Lifetime.SINGLETON
        assert binding.factory(None) is value


class TestBindingRegistry:
    """Test cases for the BindingRegistry model."""

    def test_registry_starts_empty(self):
        """Test that a new registry has no bindings."""
        registry = BindingRegistry()
        assert len(registry) == 0
        assert list(registry.keys()) == []

    def test_put_registers_in_matching_table(self):
        """Test that put stores the factory in the lifetime's table."""
        registry = BindingRegistry()
        factory = lambda i: 1  # noqa: E731

        registry.put("a", Lifetime.VOLATILE, factory)

        assert registry.volatile == {"a": factory}
        assert registry.lifetime_of("a") is Lifetime.VOLATILE
        assert "a" in registry

    def test_put_evicts_other_tables(self):
        """Test that a key lives in only one table."""
        registry = BindingRegistry()
        registry.put("a", Lifetime.VOLATILE, lambda i: 1)
        registry.put("a", Lifetime.SINGLETON, lambda i: 2)

        assert "a" not in registry.volatile
        assert "a" in registry.singleton
        assert len(registry) == 1

    def test_evict(self):
        """Test that evict removes a key and reports it."""
        registry = BindingRegistry()
        registry.put("a", Lifetime.TRANSIENT, lambda i: 1)

        assert registry.evict("a") is True
        assert registry.evict("a") is False
        assert "a" not in registry

    def test_merge_into_itself(self):
        """Test that merging a registry into itself leaves every table intact."""
        registry = BindingRegistry()
        registry.put("a", Lifetime.SINGLETON, lambda i: 1)
        registry.put("b", Lifetime.VOLATILE, lambda i: 2)

        registry.merge(registry)

        assert len(registry) == 2
        assert registry.lifetime_of("a") is Lifetime.SINGLETON
        assert registry.lifetime_of("b") is Lifetime.VOLATILE

    def test_lookup(self):
        """Test that lookup returns a Binding or None."""
        registry = BindingRegistry()
        factory = lambda i: 1  # noqa: E731
        registry.put("a", Lifetime.TRANSIENT, factory)

        binding = registry.lookup("a")
        assert binding.lifetime is Lifetime.TRANSIENT
        assert binding.factory is factory
        assert registry.lookup("missing") is None

    def test_merge_overrides_across_tables(self):
        """Test that merged bindings win regardless of their lifetime."""
        registry = BindingRegistry()
        registry.put("a", Lifetime.VOLATILE, lambda i: 1)
        registry.put("b", Lifetime.TRANSIENT, lambda i: 2)

        other = BindingRegistry()
        other.put("a", Lifetime.SINGLETON, lambda i: 3)

        registry.merge(other)

        assert registry.lifetime_of("a") is Lifetime.SINGLETON
        assert registry.lifetime_of("b") is Lifetime.TRANSIENT
        assert registry.singleton["a"](None) == 3

    def test_snapshot_is_independent(self):
        """Test that mutating a snapshot leaves the original untouched."""
        registry = BindingRegistry()
        registry.put("a", Lifetime.SINGLETON, lambda i: 1)

        snapshot = registry.snapshot()
        del snapshot.singleton["a"]
        snapshot.put("b", Lifetime.TRANSIENT, lambda i: 2)

        assert "a" in registry
        assert "b" not in registry

    def test_table_rejects_unknown_lifetime(self):
        """Test that table() validates the lifetime."""
        with pytest.raises(LifetimeError):
            BindingRegistry().table("scoped")
