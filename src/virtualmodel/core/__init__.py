from .virtuals import Virtual, VirtualRegistry, virtual, VirtualModelError, VirtualDeclarationError
from .capture import PatchCapture, PatchCaptureClosedError
from .options import SaveOptions, SerializeOptions
from .mixins import PersistenceMixin, VirtualsMixin
from .record import Record
from .model import Model

__all__ = [
    "Virtual",
    "VirtualRegistry",
    "virtual",
    "VirtualModelError",
    "VirtualDeclarationError",
    "PatchCapture",
    "PatchCaptureClosedError",
    "SaveOptions",
    "SerializeOptions",
    "PersistenceMixin",
    "VirtualsMixin",
    "Record",
    "Model",
]
