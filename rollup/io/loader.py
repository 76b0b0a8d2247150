# rollup/io/loader.py
"""Data loading functionality"""
import json
import os
from typing import List, Dict, Any

from rollup.config import ALLOCATION_MODES
from rollup.models import Group, DatasetError, parse_dataset


class DataLoader:
    """Handles loading of the nested dataset and edit scripts"""

    @staticmethod
    def load_json(filepath: str) -> Any:
        """Load JSON file"""
        with open(filepath, 'r') as f:
            return json.load(f)

    @staticmethod
    def load_dataset(filepath: str) -> List[Group]:
        """Load the nested group/item dataset from a JSON file"""
        groups = parse_dataset(DataLoader.load_json(filepath))
        item_count = sum(len(g.children) for g in groups)

        print(f"Loaded {len(groups)} groups and {item_count} items")

        return groups

    @staticmethod
    def load_edits(filepath: str) -> List[Dict[str, Any]]:
        """
        Load an edit script: a list of {"row" | "id", "input", "mode"} entries.
        A missing file means there is nothing to replay.
        """
        if not os.path.exists(filepath):
            return []

        edits = DataLoader.load_json(filepath)
        if not isinstance(edits, list):
            raise DatasetError("Edit script must be a list")

        for edit in edits:
            if not isinstance(edit, dict):
                raise DatasetError(f"Edit entry must be an object: {edit!r}")
            if 'row' not in edit and 'id' not in edit:
                raise DatasetError(f"Edit entry needs a 'row' index or an 'id': {edit}")
            if edit.get('mode') not in ALLOCATION_MODES:
                raise DatasetError(
                    f"Edit entry mode must be one of {sorted(ALLOCATION_MODES)}: {edit}"
                )

        print(f"Loaded {len(edits)} edits")

        return edits
