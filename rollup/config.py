# rollup/config.py
"""Configuration settings for the allocation table"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable"""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# File paths
DATA_DIR = os.getenv('ROLLUP_DATA_DIR', './data')
DATASET_FILE = os.getenv('ROLLUP_DATASET_FILE', os.path.join(DATA_DIR, 'dataset.json'))
EDITS_FILE = os.getenv('ROLLUP_EDITS_FILE', os.path.join(DATA_DIR, 'edits.json'))

# Rounding and formatting
DECIMAL_PLACES = 2
INITIAL_VARIANCE = "0%"

# Allocation settings
DISTRIBUTE_GROUP_PERCENT = _env_flag('DISTRIBUTE_GROUP_PERCENT')

# Validation settings
ROLLUP_TOLERANCE = 0.005

# Allocation modes accepted by edit scripts
ALLOCATION_MODES = {'percent', 'value'}
