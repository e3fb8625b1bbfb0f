"""Grid model, mutation operations, and the sheet façade."""

from . import operations
from .model import Address, GridModel, OutOfRangeAccess, Shape
from .placeholder import column_label, generate_placeholder
from .sheet import ROW_ACTIONS, Sheet, SheetDelta

__all__ = [
    "Address",
    "GridModel",
    "OutOfRangeAccess",
    "ROW_ACTIONS",
    "Shape",
    "Sheet",
    "SheetDelta",
    "column_label",
    "generate_placeholder",
    "operations",
]
