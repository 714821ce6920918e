"""
Virtual property declarations and the per-class registry.

A virtual is declared on a model class in one of three ways:

    class Person(Model):
        virtuals = {
            "initials": lambda self: self.get("first")[0] + self.get("last")[0],
            "full_name": {"get": get_full_name, "set": set_full_name},
        }

        @virtual
        def greeting(self, salutation="Hello"):
            return f"{salutation}, {self.get('first')}"

        @greeting.setter
        def greeting(self, value):
            self.set("first", value.split()[-1])

Declarations are collected once per class into a read-only VirtualRegistry.
Nothing is installed on instances; accessors consult the registry at call time.
"""

import logging
from types import MappingProxyType
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class VirtualModelError(Exception):
    """Base exception for virtual property handling"""
    pass


class VirtualDeclarationError(VirtualModelError, TypeError):
    """Raised when a class declares a virtual that has no usable getter"""
    pass


class Virtual(BaseModel):
    """A single virtual property: a getter and an optional setter."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    fget: Callable[..., Any]
    fset: Optional[Callable[[Any, Any], Any]] = None

    @property
    def writable(self) -> bool:
        return self.fset is not None

    def setter(self, fset: Callable[[Any, Any], Any]) -> 'Virtual':
        """Decorator form for attaching a setter, mirroring ``property.setter``."""
        return self.model_copy(update={"fset": fset})

    def read(self, target: Any, *args: Any) -> Any:
        return self.fget(target, *args)

    def write(self, target: Any, value: Any) -> None:
        """Call the setter for its side effects. Read-only virtuals ignore the write."""
        if self.fset is None:
            logger.debug(f"Ignoring write to read-only virtual '{self.name}'")
            return
        self.fset(target, value)

    @classmethod
    def from_declaration(cls, name: str, declaration: Any) -> 'Virtual':
        """Normalize any supported declaration form into a Virtual named ``name``."""
        if isinstance(declaration, Virtual):
            if declaration.name == name:
                return declaration
            return declaration.model_copy(update={"name": name})

        if isinstance(declaration, Mapping):
            getter = declaration.get("get")
            setter = declaration.get("set")
            if not callable(getter):
                raise VirtualDeclarationError(f"Virtual '{name}' must declare a callable 'get'")
            if setter is not None and not callable(setter):
                raise VirtualDeclarationError(f"Virtual '{name}' declares a non-callable 'set'")
            return cls(name=name, fget=getter, fset=setter)

        if callable(declaration):
            return cls(name=name, fget=declaration)

        raise VirtualDeclarationError(
            f"Virtual '{name}' must be a function or a {{'get': ..., 'set': ...}} mapping, "
            f"got {type(declaration).__name__}"
        )


def virtual(fget: Callable[..., Any]) -> Virtual:
    """Declare a virtual property from a getter method."""
    return Virtual(name=fget.__name__, fget=fget)


class VirtualRegistry(Mapping):
    """Read-only mapping of virtual name to Virtual for one model class."""

    def __init__(self, virtuals: Iterable[Virtual] = ()):
        self._virtuals = MappingProxyType({v.name: v for v in virtuals})

    def __getitem__(self, name: str) -> Virtual:
        return self._virtuals[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._virtuals)

    def __len__(self) -> int:
        return len(self._virtuals)

    def __repr__(self) -> str:
        return f"VirtualRegistry({list(self._virtuals)})"

    def names(self) -> List[str]:
        return list(self._virtuals)

    def is_readable(self, name: str) -> bool:
        return name in self._virtuals

    def is_writable(self, name: str) -> bool:
        entry = self._virtuals.get(name)
        return entry is not None and entry.writable

    @classmethod
    def for_class(cls, model_class: type) -> 'VirtualRegistry':
        """
        Build the registry for ``model_class``.

        Inherited virtuals come first, then the class's own ``virtuals`` mapping,
        then ``@virtual`` members. Decorated members are removed from the class
        namespace so instances never expose them as attributes.
        """
        collected = {}
        for base in reversed(model_class.__mro__[1:]):
            inherited = base.__dict__.get("__virtual_registry__")
            if inherited:
                collected.update(inherited)

        for name, declaration in (model_class.__dict__.get("virtuals") or {}).items():
            collected[name] = Virtual.from_declaration(name, declaration)

        for attr_name, value in list(model_class.__dict__.items()):
            if isinstance(value, Virtual):
                collected[attr_name] = Virtual.from_declaration(attr_name, value)
                delattr(model_class, attr_name)

        return cls(collected.values())
