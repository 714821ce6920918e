"""
PatchCapture: the side-effect sink used while a patch save runs virtual setters.

During ``save(..., patch=True)`` each virtual setter is called with a
PatchCapture in place of the model. Real-attribute writes made through the
capture land in its buffer instead of the model's live attributes, and the
buffer is merged into the payload sent to the backend. The buffer belongs to
one ``with`` block and is released when that block exits, whether or not a
setter raised.
"""

import inspect
from collections.abc import Mapping
from types import FunctionType, MethodType
from typing import Any, Dict, TYPE_CHECKING

from .virtuals import VirtualModelError

if TYPE_CHECKING:
    from .mixins.virtuals_mixin import VirtualsMixin


class PatchCaptureClosedError(VirtualModelError, RuntimeError):
    """Raised when a capture is written to outside of its ``with`` block"""
    pass


class PatchCapture:
    """Write-redirecting view of a model for the duration of one patch save."""

    def __init__(self, model: 'VirtualsMixin'):
        self._model = model
        self._buffer: Dict[str, Any] = {}
        self._active = False

    def __enter__(self) -> 'PatchCapture':
        self._buffer = {}
        self._active = True
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self._buffer.clear()
        self._active = False
        return False

    def __getattr__(self, item):
        # Plain model methods are bound to the capture so their set calls land in
        # the buffer. Methods relying on zero-argument super() need the real model.
        model = self.__dict__.get("_model")
        if model is None:
            raise AttributeError(item)
        member = inspect.getattr_static(type(model), item, None)
        if isinstance(member, FunctionType) and "__class__" not in member.__code__.co_freevars:
            return MethodType(member, self)
        return getattr(model, item)

    def __repr__(self) -> str:
        state = "capturing" if self._active else "released"
        return f"<PatchCapture {state} {self._model!r} buffer={self._buffer!r}>"

    @property
    def model(self) -> 'VirtualsMixin':
        return self._model

    @property
    def active(self) -> bool:
        return self._active

    @property
    def captured(self) -> Dict[str, Any]:
        """Copy of the real-attribute writes collected so far."""
        return dict(self._buffer)

    def get(self, name: str, *args: Any) -> Any:
        """Read through the buffer: captured writes shadow the model's values."""
        registry = self._model.virtual_registry()
        if name in registry:
            return registry[name].read(self, *args)
        if name in self._buffer:
            return self._buffer[name]
        return self._model.get(name, *args)

    def set(self, key, value=None, **options) -> 'PatchCapture':
        """Record real-attribute writes in the buffer; virtual keys re-enter their setters."""
        if not self._active:
            raise PatchCaptureClosedError("PatchCapture used outside of its save")
        if key is None:
            return self
        attrs = key if isinstance(key, Mapping) else {key: value}
        if options.get("unset"):
            # Removals reach the backend as nulls; virtuals have nothing to remove
            registry = self._model.virtual_registry()
            self._buffer.update((name, None) for name in attrs if name not in registry)
            return self
        for name, attr_value in attrs.items():
            if not self._model.set_virtual(name, attr_value, target=self):
                self._buffer[name] = attr_value
        return self

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def unset(self, name: str) -> 'PatchCapture':
        return self.set(name, None, unset=True)

    def clear(self) -> 'PatchCapture':
        """Null every real attribute the model holds or the setters have written."""
        return self.set(dict.fromkeys({**self._model.attributes, **self._buffer}), unset=True)

    def collect(self, attrs: Mapping) -> Dict[str, Any]:
        """
        Run the setters for every virtual key of a save payload.

        Returns the sanitized payload: the non-virtual keys of ``attrs`` plus
        everything the setters wrote, with the setters' writes taking priority.
        """
        if not self._active:
            raise PatchCaptureClosedError("PatchCapture used outside of its save")
        payload = {}
        for name, value in attrs.items():
            if not self._model.set_virtual(name, value, target=self):
                payload[name] = value
        payload.update(self._buffer)
        return payload
