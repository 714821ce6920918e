"""
VirtualsMixin: virtual (computed) properties on top of a record.

Mixed in ahead of a record class, it intercepts get, set, save and to_json
and routes names found in the class's VirtualRegistry to their getters and
setters. Everything else falls through to the record unchanged.
"""

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from ..capture import PatchCapture
from ..options import SerializeOptions
from ..virtuals import VirtualRegistry

logger = logging.getLogger(__name__)


class VirtualsMixin:
    """
    Virtual property mixin.

    Subclasses declare virtuals with a ``virtuals`` mapping or the ``@virtual``
    decorator; the registry is built once per class when the class is created.
    """

    # Include virtuals in to_json unless the call says otherwise
    output_virtuals: ClassVar[bool] = True

    __virtual_registry__: ClassVar[VirtualRegistry] = VirtualRegistry()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.__virtual_registry__ = VirtualRegistry.for_class(cls)

    @classmethod
    def virtual_registry(cls) -> VirtualRegistry:
        return cls.__virtual_registry__

    def get(self, name: str, *args: Any) -> Any:
        """Return a virtual's computed value, or the real attribute."""
        registry = self.virtual_registry()
        if name in registry:
            return registry[name].read(self, *args)
        return super().get(name, *args)

    def set(self, key, value=None, **options):
        """
        Set attributes, dispatching virtual names to their setters.

        Accepts ``set("name", value)`` and ``set({"name": value, ...})``.
        Writes to virtuals without a setter are dropped without error.
        """
        if key is None:
            return self

        if options.get("unset"):
            # Virtuals hold no state of their own to remove
            registry = self.virtual_registry()
            names = key if isinstance(key, Mapping) else {key: value}
            return super().set({name: None for name in names if name not in registry}, **options)

        if isinstance(key, Mapping):
            real = {name: attr_value for name, attr_value in key.items()
                    if not self.set_virtual(name, attr_value)}
            return super().set(real, **options)

        if self.set_virtual(key, value):
            return self
        return super().set(key, value, **options)

    def set_virtual(self, name: str, value: Any, target: Any = None) -> bool:
        """
        Route a write to the virtual ``name`` if there is one.

        ``target`` is what the setter receives as ``self``: the model itself,
        or a PatchCapture while a patch save is collecting side effects.

        Returns:
            True if ``name`` is virtual (whether or not it has a setter)
        """
        entry = self.virtual_registry().get(name)
        if entry is None:
            return False
        entry.write(self if target is None else target, value)
        return True

    async def save(self, key=None, value=None, **options):
        """Save, running virtual setters into a PatchCapture for patch updates."""
        attrs, options = self._save_arguments(key, value, options)
        options["method"] = self.save_method(options.get("method"))

        if options["method"] == "update" and options.get("patch"):
            try:
                with PatchCapture(self) as capture:
                    attrs = capture.collect(attrs)
            except Exception as e:
                logger.warning(f"Patch save of {self.table}:{self.id} aborted by a virtual setter: {e!r}")
                raise

        return await super().save(attrs, **options)

    def to_json(self, **options) -> Dict[str, Any]:
        """Serialize real attributes, merging virtuals according to the options."""
        attrs = super().to_json(**options)
        opts = SerializeOptions.model_validate(options)

        if opts.omit_new and self.is_new():
            return attrs

        include = self.output_virtuals if opts.virtuals is None else opts.virtuals
        if include:
            attrs.update(self.virtual_values(opts.virtual_params))
        return attrs

    def virtual_values(self, params: Optional[Mapping] = None) -> Dict[str, Any]:
        """Compute every virtual, with per-virtual getter arguments from ``params``."""
        values = {}
        for name, entry in self.virtual_registry().items():
            values[name] = entry.read(self, *self._virtual_args(params, name))
        return values

    @staticmethod
    def _virtual_args(params: Optional[Mapping], name: str) -> Tuple[Any, ...]:
        if not params or name not in params:
            return ()
        return (params[name],)

    # Attribute helpers over real attributes merged with every virtual value

    def _all_values(self) -> Dict[str, Any]:
        return {**self.attributes, **self.virtual_values()}

    def keys(self) -> List[str]:
        return list(self._all_values())

    def values(self) -> List[Any]:
        return list(self._all_values().values())

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._all_values().items())

    def invert(self) -> Dict[Any, str]:
        """Map each value back to its name. Unhashable values are keyed by their str()."""
        inverted = {}
        for name, attr_value in self._all_values().items():
            try:
                hash(attr_value)
            except TypeError:
                attr_value = str(attr_value)
            inverted[attr_value] = name
        return inverted

    def pick(self, *names: str) -> Dict[str, Any]:
        merged = self._all_values()
        return {name: merged[name] for name in names if name in merged}

    def omit(self, *names: str) -> Dict[str, Any]:
        return {name: attr_value for name, attr_value in self._all_values().items() if name not in names}
