from collections.abc import Mapping
from typing import Any, ClassVar, Dict, Optional, Sequence

from .mixins import PersistenceMixin


class Record(PersistenceMixin):
    """
    Plain persisted record: an attribute mapping with save/fetch/destroy.

    ``get``/``set`` here only know about real attributes. ``Model`` layers
    virtual properties on top of them.
    """

    # Attributes left out of to_json (still persisted)
    hidden: ClassVar[Sequence[str]] = ()

    def __init__(self, attributes: Optional[Mapping] = None, **options):
        self.attributes: Dict[str, Any] = {}
        self._previous_attributes: Dict[str, Any] = {}
        self.set(attributes, **options)
        self._sync_previous()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.attributes!r}>"

    def get(self, name: str, *args: Any) -> Any:
        return self.attributes.get(name)

    def set(self, key, value=None, **options):
        """Set one attribute or a mapping of them; ``unset=True`` removes them instead."""
        if key is None:
            return self
        attrs = key if isinstance(key, Mapping) else {key: value}
        if options.get("unset"):
            for name in attrs:
                self.attributes.pop(name, None)
        else:
            self.attributes.update(attrs)
        return self

    def has(self, name: str) -> bool:
        return self.attributes.get(name) is not None

    def unset(self, name: str):
        return self.set(name, None, unset=True)

    def clear(self):
        return self.set(dict.fromkeys(self.attributes), unset=True)

    def has_changed(self, name: Optional[str] = None) -> bool:
        """Whether attributes differ from their state at the last save/fetch."""
        if name is None:
            return self.attributes != self._previous_attributes
        return self.attributes.get(name) != self._previous_attributes.get(name)

    def previous(self, name: str) -> Any:
        return self._previous_attributes.get(name)

    def to_json(self, **options) -> Dict[str, Any]:
        return {name: value for name, value in self.attributes.items() if name not in self.hidden}

    def serialize(self, **options) -> Dict[str, Any]:
        return self.to_json(**options)

    def _sync_previous(self) -> None:
        self._previous_attributes = dict(self.attributes)
