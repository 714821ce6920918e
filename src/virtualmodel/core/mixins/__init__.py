"""
Core mixins for record functionality.

These mixins provide reusable functionality that can be mixed into
any record class without inheritance conflicts.
"""

from .persistence_mixin import PersistenceMixin
from .virtuals_mixin import VirtualsMixin

__all__ = ["PersistenceMixin", "VirtualsMixin"]
