# rollup/models/dataset.py
"""Nested dataset records supplied by the data source"""
from typing import List, Dict, Any


class DatasetError(ValueError):
    """Raised when the nested dataset is malformed"""


def _require_id(data: Dict[str, Any], kind: str) -> str:
    if not isinstance(data, dict):
        raise DatasetError(f"{kind} entry must be an object, got {type(data).__name__}")
    if data.get('id') in (None, ''):
        raise DatasetError(f"{kind} entry is missing an 'id': {data}")
    return str(data['id'])


class Item:
    """Represents a leaf item of a group"""

    def __init__(self, data: Dict[str, Any]):
        self.id: str = _require_id(data, 'Item')
        self.label: str = str(data.get('label', self.id))
        try:
            self.value: float = float(data.get('value', 0))
        except (TypeError, ValueError):
            raise DatasetError(
                f"Item {self.id} has a non-numeric value: {data.get('value')!r}"
            ) from None
        self._raw_data = data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return self._raw_data.copy()

    def __repr__(self) -> str:
        return f"Item({self.id}, {self.label}, {self.value})"


class Group:
    """Represents a group and the items it aggregates"""

    def __init__(self, data: Dict[str, Any]):
        self.id: str = _require_id(data, 'Group')
        self.label: str = str(data.get('label', self.id))
        children = data.get('children', [])
        if not isinstance(children, list):
            raise DatasetError(f"Group {self.id} 'children' must be a list")
        self.children: List[Item] = [Item(c) for c in children]
        self._raw_data = data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return self._raw_data.copy()

    def __repr__(self) -> str:
        return f"Group({self.id}, {self.label}, {len(self.children)} items)"


def parse_dataset(data: Dict[str, Any]) -> List[Group]:
    """Parse the {'rows': [...]} dataset shape into groups"""
    if not isinstance(data, dict) or not isinstance(data.get('rows'), list):
        raise DatasetError("Dataset must be an object with a 'rows' list")
    return [Group(g) for g in data['rows']]
