import functools
import inspect
from typing import Any, Callable, Hashable, TypeVar

from fastapi import FastAPI, Request

from volatile_inject.domain import IResolver

T = TypeVar("T")

APP_STATE_ATTRIBUTE = "injector"


def create_fastapi_dependency(injector: IResolver, key: Hashable) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves ``key`` from the injector.

    The resolved instance lifetime follows the binding in the injector
    (singleton, prototype or volatile).

    Args:
        injector: The injector to resolve from.
        key: The key to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> injector = Module().bind_singletons({
        ...     UserRepository: lambda i: UserRepository(i(DatabaseConnection)),
        ... }).build_injector()
        >>>
        >>> get_user_repo = create_fastapi_dependency(injector, UserRepository)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the dependency from the injector."""
        return injector.resolve(key)

    return dependency


def install_injector(app: FastAPI, injector: IResolver) -> None:
    """Attach ``injector`` to the application state for :func:`create_app_dependency`."""
    setattr(app.state, APP_STATE_ATTRIBUTE, injector)


def create_app_dependency(key: Hashable) -> Callable[[Request], Any]:
    """Create a FastAPI dependency resolving ``key`` from the injector installed on the app.

    Requires :func:`install_injector` to have been called for the application.

    Args:
        key: The key to resolve.

    Returns:
        A callable that resolves from ``request.app.state.injector``.

    Example:
        >>> install_injector(app, injector)
        >>> get_settings = create_app_dependency("settings")
        >>>
        >>> @app.get("/settings")
        >>> async def read_settings(settings: dict = Depends(get_settings)):
        ...     return settings
    """

    def app_dependency(request: Request) -> Any:
        """Resolve from the application's injector."""
        injector = getattr(request.app.state, APP_STATE_ATTRIBUTE, None)
        if injector is None:
            raise RuntimeError("Application does not have an injector. Did you forget to call install_injector()?")
        return injector.resolve(key)

    return app_dependency


def inject_dependencies(injector: IResolver, **params: Hashable) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator that injects resolved keys into keyword parameters of an endpoint.

    Injected parameters are removed from the signature FastAPI sees, so they
    are never mistaken for query or body parameters. Values passed explicitly
    by the caller take precedence.

    Args:
        injector: The injector to resolve from.
        **params: Mapping of parameter name to the key to resolve for it.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(injector, user_service=UserService, logger="logger")
        >>> async def list_users(user_service: UserService, logger: Logger):
        ...     logger.info("Listing users")
        ...     return await user_service.get_all()
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        """Wrap the function with dependency injection logic."""
        signature = inspect.signature(func)
        unknown = set(params) - set(signature.parameters)
        if unknown:
            raise TypeError(f"{func.__name__}() has no parameters named: {', '.join(sorted(unknown))}")

        visible = [param for name, param in signature.parameters.items() if name not in params]

        def resolve_missing(kwargs: dict) -> dict:
            for param_name, key in params.items():
                if param_name not in kwargs:
                    kwargs[param_name] = injector.resolve(key)
            return kwargs

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                """Resolve dependencies and await the original function."""
                return await func(*args, **resolve_missing(kwargs))

            wrapper: Callable[..., Any] = async_wrapper
        else:

            @functools.wraps(func)
            def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
                """Resolve dependencies and call the original function."""
                return func(*args, **resolve_missing(kwargs))

            wrapper = sync_wrapper

        wrapper.__signature__ = signature.replace(parameters=visible)  # type: ignore[attr-defined]
        # Unwrapping would expose the injected parameters again.
        del wrapper.__wrapped__  # type: ignore[attr-defined]
        return wrapper

    return decorator
