"""Integration tests for end-to-end resolution across modules."""

import gc
import weakref

import pytest

from volatile_inject import (
    Binding,
    InjectorConfig,
    MissingBindingError,
    Module,
    as_singleton,
    as_volatile,
    create_injector,
    create_module,
)


class ServiceA:
    def __init__(self):
        self.state = {"foo": "bar"}

    def use(self):
        return self.state["foo"]


class ServiceB:
    def __init__(self, service_a: ServiceA):
        self.service_a = service_a

    def use_service_a(self):
        return self.service_a.use()


class TestComposedApplication:
    """Test a small application wired from two modules."""

    def test_service_graph(self):
        """Test that a singleton consumer keeps its volatile dependency alive."""
        module_a = create_module({"service_a": Binding.volatile(lambda i: ServiceA())})
        module_b = create_module(
            {"service_b": Binding.singleton(lambda i: ServiceB(i("service_a")))},
            module_a,
        )

        injector = module_b.build_injector()

        assert injector("service_b").use_service_a() == "bar"
        gc.collect()
        assert injector("service_a") is injector("service_b").service_a

    def test_volatile_dependency_recreated_when_released(self):
        """Test that a volatile shared by transient consumers is rebuilt after release."""
        built = []

        def make_a(injector):
            built.append(1)
            return ServiceA()

        injector = (
            Module()
            .bind_volatile("service_a", make_a)
            .bind_prototype("service_b", lambda i: ServiceB(i("service_a")))
            .build_injector()
        )

        first = injector("service_b")
        second = injector("service_b")
        assert first.service_a is second.service_a
        assert len(built) == 1

        del first, second
        gc.collect()

        injector("service_b")
        assert len(built) == 2


class TestDocumentedProperties:
    """Test the documented resolution properties end to end."""

    def test_singleton_identity(self):
        """Test that singletons resolve to one instance built once."""
        calls = []
        injector = Module().bind_singleton("a", lambda i: calls.append(1) or ServiceA()).build_injector()

        assert len({id(injector("a")) for _ in range(10)}) == 1
        assert calls == [1]

    def test_prototype_instances(self):
        """Test that prototypes build a distinct instance per resolution."""
        injector = Module().bind_prototype("a", lambda i: ServiceA()).build_injector()

        instances = [injector("a") for _ in range(4)]

        assert len({id(instance) for instance in instances}) == 4

    def test_volatile_lifecycle(self):
        """Test that volatiles are shared while held and rebuilt once collected."""
        calls = []
        injector = Module().bind_volatile("a", lambda i: calls.append(1) or ServiceA()).build_injector()

        held = injector("a")
        assert injector("a") is held
        assert calls == [1]

        ref = weakref.ref(held)
        del held
        gc.collect()

        assert ref() is None
        assert isinstance(injector("a"), ServiceA)
        assert calls == [1, 1]

    def test_merge_override(self):
        """Test that the later of two merged modules wins."""
        m1 = Module().bind_value("a", 1)
        m2 = Module().bind_value("a", 2)

        assert Module().merge(m1, m2).build_injector()("a") == 2

    def test_recursive_dependency(self):
        """Test resolving a value derived from another binding."""
        injector = create_injector(
            {
                "foo": Binding.singleton(lambda i: "bar"),
                "bar": Binding.singleton(lambda i: i("foo").replace("r", "z")),
            }
        )

        assert injector("bar") == "baz"

    def test_missing_key(self):
        """Test that unbound keys fail loudly."""
        injector = Module().build_injector()

        with pytest.raises(MissingBindingError, match="'nonexistent'"):
            injector("nonexistent")

    def test_volatile_without_weak_references(self):
        """Test that volatile bindings act as singletons without weak references."""
        calls = []
        module = Module(InjectorConfig(weak_references=False))
        injector = module.bind_volatile("a", lambda i: calls.append(1) or ServiceA()).build_injector()

        ref = weakref.ref(injector("a"))
        gc.collect()

        assert ref() is injector("a")
        assert calls == [1]


class TestStandaloneHelpersInModules:
    """Test using the standalone helpers as binding factories."""

    def test_shared_singleton_across_injectors(self):
        """Test that an as_singleton factory is shared by every injector using it."""
        shared = as_singleton(lambda injector: ServiceA())
        module = Module().bind_prototype("a", shared)

        assert module.build_injector()("a") is module.build_injector()("a")

    def test_volatile_helper_as_factory(self):
        """Test that an as_volatile factory caches across transient resolutions."""
        factory = as_volatile(lambda injector: ServiceA())
        injector = Module().bind_prototype("a", factory).build_injector()

        held = injector("a")

        assert injector("a") is held
