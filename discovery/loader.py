"""Module loaders that turn extracted identifiers into invocable providers.

Two loaders ship with the package:

- ``ImportLoader`` maps ``package\\module\\Name`` onto the Python import
  system (``importlib.import_module("package.module")`` then ``Name``).
- ``RegistryLoader`` resolves identifiers through an explicit table of
  factories, filled by ``register`` / ``register_class``.
"""

import importlib
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from .parser import SCOPE_SEPARATOR

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], Any]


def normalize_identifier(identifier: str) -> str:
    """Strip the leading separator of a fully qualified identifier."""
    return identifier.lstrip(SCOPE_SEPARATOR)


class ModuleLoader(ABC):
    """Capabilities the discovery pipeline needs from a loader."""

    @abstractmethod
    def exists(self, identifier: str) -> bool:
        """Return True if the identifier resolves to a loadable unit."""

    @abstractmethod
    def load(self, identifier: str) -> Any:
        """Load (instantiate) the unit named by the identifier."""

    def is_invocable(self, unit: Any) -> bool:
        """Return True if the loaded unit can be called without arguments."""
        return callable(unit)

    def invoke(self, unit: Any) -> Any:
        """Call the loaded unit and return its result."""
        return unit()


class ImportLoader(ModuleLoader):
    """
    Resolve identifiers through ``importlib``.

    The last segment always names an attribute of the module given by the
    segments before it, so ``pkg\\mod`` is looked up as attribute ``mod`` of
    module ``pkg``, never as the module ``pkg.mod`` itself. Path-derived identifiers
    must therefore point at the file declaring the provider, not at a module.
    """

    def _split(self, identifier: str) -> Tuple[str, str]:
        module_path, _, attribute = normalize_identifier(identifier).rpartition(SCOPE_SEPARATOR)
        return module_path.replace(SCOPE_SEPARATOR, "."), attribute

    def _resolve(self, identifier: str) -> Optional[Any]:
        module_path, attribute = self._split(identifier)
        if not attribute.isidentifier():
            return None
        if not module_path or not all(part.isidentifier() for part in module_path.split(".")):
            return None
        try:
            module = importlib.import_module(module_path)
        except ModuleNotFoundError as e:
            # Only a missing target module means "does not exist"; broken
            # imports inside an existing module propagate
            if e.name is None or not (module_path + ".").startswith(e.name + "."):
                raise
            logger.debug("Cannot import %s for %s: %s", module_path, identifier, e)
            return None
        target = getattr(module, attribute, None)
        # Submodules show up as package attributes once imported
        if inspect.ismodule(target):
            return None
        return target

    def exists(self, identifier: str) -> bool:
        return self._resolve(identifier) is not None

    def load(self, identifier: str) -> Any:
        target = self._resolve(identifier)
        if target is None:
            module_path, attribute = self._split(identifier)
            raise LookupError(f"'{attribute}' not found in module '{module_path}'")
        # Classes are instantiated with no arguments, anything else is used as is
        if inspect.isclass(target):
            return target()
        return target


class RegistryLoader(ModuleLoader):
    """
    Resolve identifiers through explicitly registered factories.

    Identifiers are stored without their leading separator, so ``\\Foo`` and
    ``Foo`` name the same entry.
    """

    def __init__(self, factories: Optional[Dict[str, ProviderFactory]] = None):
        self._factories: Dict[str, ProviderFactory] = {}
        for identifier, factory in (factories or {}).items():
            self.register(identifier, factory)

    def register(self, identifier: str, factory: ProviderFactory) -> ProviderFactory:
        """
        Register a no-argument factory under an identifier.

        Raises:
            KeyError: If the identifier is already registered.
        """
        key = normalize_identifier(identifier)
        if key in self._factories:
            raise KeyError(f"Provider factory already registered for '{key}'")
        self._factories[key] = factory
        return factory

    def register_class(self, identifier: str) -> Callable[[type], type]:
        """Decorator registering a class as its own factory."""
        def _decorator(klass: type) -> type:
            self.register(identifier, klass)
            return klass
        return _decorator

    def identifiers(self) -> List[str]:
        """All registered identifiers in deterministic order."""
        return sorted(self._factories)

    def exists(self, identifier: str) -> bool:
        return normalize_identifier(identifier) in self._factories

    def load(self, identifier: str) -> Any:
        return self._factories[normalize_identifier(identifier)]()
