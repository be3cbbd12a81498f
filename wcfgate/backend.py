"""Serialized access to the backend capability.

The automation backend is not safe for concurrent invocation, so every call
goes through one BackendGuard holding one lock. The critical section is a
single backend call; nothing sleeps or waits on I/O of its own while holding
the lock.

Usage:
    guard = BackendGuard(backend)
    logged_in = guard.call("is_login")
    members = guard.run(lambda b: b.list_group_members("123@chatroom"))
"""

from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from contracts.wechat import WeChatBackend
from wcfgate.errors import BackendError, BackendUnavailableError, ConfigurationError
from wcfgate.errors.base import ErrorCode
from wcfgate.observability.logging import timed_operation

logger = logging.getLogger(__name__)

R = TypeVar("R")


class BackendGuard:
    """Owns the single backend handle behind a mutual-exclusion lock.

    Lock acquisition order is whatever ``threading.Lock`` gives; there is
    no fairness guarantee between waiting requests.
    """

    def __init__(self, backend: WeChatBackend) -> None:
        self._backend = backend
        self._lock = threading.Lock()

    @property
    def backend(self) -> WeChatBackend:
        """The guarded backend. Only touch it through run() or call()."""
        return self._backend

    def locked(self) -> bool:
        """Return True while some request is inside a backend call."""
        return self._lock.locked()

    def run(self, op: Callable[[WeChatBackend], R], name: str = "backend.op") -> R:
        """Invoke ``op`` with the backend while holding the lock.

        The lock is released on every exit path. Failures that are not
        already BackendError are wrapped in one, keeping the original as
        the cause.

        Args:
            op: Callable performing exactly one backend call.
            name: Operation name for logging.

        Returns:
            Whatever ``op`` returned, unchanged.

        Raises:
            BackendError: If the backend call failed.
        """
        with self._lock, timed_operation(logger, name):
            try:
                return op(self._backend)
            except BackendError:
                raise
            except Exception as e:
                raise BackendError(str(e) or type(e).__name__, operation=name, cause=e) from e

    def call(self, operation: str, *args: Any) -> Any:
        """Call backend method ``operation`` with ``args`` under the lock."""
        return self.run(lambda b: getattr(b, operation)(*args), name=f"backend.{operation}")


def load_backend_factory(import_path: str) -> Callable[[], WeChatBackend]:
    """Resolve a ``module:attribute`` path to a backend factory.

    Args:
        import_path: e.g. ``"mypkg.wcf:connect"``.

    Returns:
        Zero-argument callable producing the backend.

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported.
    """
    module_name, sep, attr = import_path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(
            f"Backend factory must look like 'module:attribute', got {import_path!r}",
            config_key="backend.factory",
        )
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(
            f"Cannot import backend factory {import_path!r}: {e}",
            config_key="backend.factory",
            code=ErrorCode.CFG_FACTORY_FAILED,
            cause=e,
        ) from e
    if not callable(factory):
        raise ConfigurationError(
            f"Backend factory {import_path!r} is not callable",
            config_key="backend.factory",
            code=ErrorCode.CFG_FACTORY_FAILED,
        )
    return factory


def create_backend(import_path: str) -> WeChatBackend:
    """Build the process-wide backend from a configured factory.

    Raises:
        ConfigurationError: If the factory cannot be resolved.
        BackendUnavailableError: If the factory itself fails.
    """
    factory = load_backend_factory(import_path)
    try:
        backend = factory()
    except Exception as e:
        raise BackendUnavailableError(
            f"Backend factory {import_path!r} failed: {e}", cause=e
        ) from e
    logger.info("Backend created via %s", import_path)
    return backend
