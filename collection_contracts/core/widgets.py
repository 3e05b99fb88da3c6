from enum import Enum


class WidgetKind(str, Enum):
    """Contract kinds; the value doubles as the contract name suffix."""
    ITEM = "Item"
    LIST = "List"
    TABLE = "Table"
    CARD = "Card"
