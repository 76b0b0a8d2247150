# rollup/models/row.py
"""Row model"""
import copy
from typing import Dict, Any, Optional

from rollup.config import INITIAL_VARIANCE


class Row:
    """Represents one line of the allocation table, either a group or an item"""

    def __init__(self, row_id: str, label: str, value: float,
                 base_value: Optional[float] = None, input: str = '',
                 variance_percent: str = INITIAL_VARIANCE,
                 is_child: bool = False, parent_id: Optional[str] = None):
        self.id: str = row_id
        self.label: str = label
        self.value: float = value
        self.base_value: float = value if base_value is None else base_value
        self.input: str = input
        self.variance_percent: str = variance_percent
        self.is_child: bool = is_child
        self.parent_id: Optional[str] = parent_id if is_child else None

    @property
    def is_group(self) -> bool:
        return not self.is_child

    def replace(self, **changes) -> 'Row':
        """Return a copy of this row with the given fields changed"""
        new_row = copy.copy(self)
        for name, value in changes.items():
            if not hasattr(new_row, name):
                raise AttributeError(f"Row has no field '{name}'")
            setattr(new_row, name, value)
        return new_row

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'id': self.id,
            'label': self.label,
            'value': self.value,
            'baseValue': self.base_value,
            'input': self.input,
            'variancePercent': self.variance_percent,
            'isChild': self.is_child,
        }
        if self.is_child:
            data['parentId'] = self.parent_id
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        kind = "Item" if self.is_child else "Group"
        return f"Row({kind} {self.id}, {self.label}, {self.value})"
