"""
Dependency injection helpers over dependency-injector.

Modules under `labdesk` declare their dependencies as `di.Provide["..."]`
defaults. `boot()` wires every labdesk module already imported, and the
import hook installed by `register_loader_containers` wires the ones imported
afterwards, e.g. CLI commands that are loaded lazily.
"""

from __future__ import annotations

__all__ = [
    "Provide",
    "as_",
    "inject",
    "register_loader_containers",
]

import functools
import importlib.machinery
import sys
import types
import typing as t

import dependency_injector.wiring as wiring
from dependency_injector.containers import Container
from dependency_injector.wiring import Provide, TypeModifier

P = t.ParamSpec("P")
TReturn = t.TypeVar("TReturn")
TAs = t.TypeVar("TAs")


def inject(fn: t.Callable[P, TReturn]) -> t.Callable[P, TReturn]:
    injections, closing = wiring._fetch_reference_injections(fn)  # pyright: ignore [reportPrivateUsage]
    patched = wiring._get_patched(fn, injections, closing)  # pyright: ignore [reportPrivateUsage]

    # route handlers keep their module globals so FastAPI can resolve the
    # forward refs in their signatures
    if fn.__module__.startswith("labdesk.web") and hasattr(fn, "__globals__"):
        return functools.wraps(fn, updated=("__globals__",))(patched)
    return patched


def as_(type_: t.Type[TAs]) -> TypeModifier:
    """Typed stand-in for `wiring.as_`"""
    return TypeModifier(type_)


class WiringImportHook(object):
    """Wire modules of the registered packages as they are imported"""

    def __init__(self) -> None:
        self.containers: dict[str, list[Container]] = {}
        self._path_hook: t.Callable[[str], t.Any] | None = None

    def register(self, containers: t.Iterable[Container], packages: t.Iterable[str]) -> None:
        for package in packages:
            registered = self.containers.setdefault(package, [])
            registered.extend(c for c in containers if c not in registered)
        self.install()

    def wire(self, module: types.ModuleType) -> None:
        for package, registered in self.containers.items():
            if module.__name__ == package or module.__name__.startswith(f"{package}."):
                for container in registered:
                    container.wire(modules=[module])

    def install(self) -> None:
        if self._path_hook is not None and self._path_hook in sys.path_hooks:
            return

        hook = self

        class SourceFileLoader(importlib.machinery.SourceFileLoader):
            def exec_module(self, module: types.ModuleType) -> None:
                super().exec_module(module)
                hook.wire(module)

        class SourcelessFileLoader(importlib.machinery.SourcelessFileLoader):
            def exec_module(self, module: types.ModuleType) -> None:
                super().exec_module(module)
                hook.wire(module)

        self._path_hook = importlib.machinery.FileFinder.path_hook(
            (importlib.machinery.ExtensionFileLoader, importlib.machinery.EXTENSION_SUFFIXES),
            (SourceFileLoader, importlib.machinery.SOURCE_SUFFIXES),
            (SourcelessFileLoader, importlib.machinery.BYTECODE_SUFFIXES),
        )
        sys.path_hooks.insert(0, self._path_hook)
        sys.path_importer_cache.clear()
        importlib.invalidate_caches()


_hook = WiringImportHook()


def register_loader_containers(*containers: Container, packages: t.Sequence[str] = ("labdesk",)) -> None:
    """Wire `containers` into modules of `packages` imported from now on"""
    _hook.register(containers, packages)
