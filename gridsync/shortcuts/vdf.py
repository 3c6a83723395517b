"""VDF file utilities using the proven ValvePython vdf library"""

import os
import shutil
import logging
from typing import Dict, Any

import vdf

from ..errors import StoreIOError

logger = logging.getLogger(__name__)


def load_shortcuts_vdf(path: str) -> Dict[str, Any]:
    """Load and parse shortcuts.vdf file using vdf library

    Returns an empty structure if the file doesn't exist.

    Raises:
        StoreIOError: the file exists but can't be read or parsed
    """
    try:
        with open(path, 'rb') as f:
            data = vdf.binary_loads(f.read())
    except FileNotFoundError:
        return {"shortcuts": {}}
    except Exception as e:
        raise StoreIOError(f"Error loading {path}: {e}") from e

    if 'shortcuts' not in data:
        # Steam writes the root key in lowercase, some tools don't
        for key in list(data.keys()):
            if key.lower() == 'shortcuts':
                data['shortcuts'] = data.pop(key)
                break
        else:
            data['shortcuts'] = {}
    return data


def save_shortcuts_vdf(path: str, data: Dict[str, Any]) -> None:
    """Save data to shortcuts.vdf file using vdf library

    The previous file is kept as ``<path>.backup`` and put back if writing
    fails or the written file doesn't read back with the expected number of
    shortcuts.

    Raises:
        StoreIOError: the file can't be written or fails validation
    """
    backup_path = path + '.backup'
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)

        # Create backup
        has_backup = os.path.exists(path)
        if has_backup:
            shutil.copyfile(path, backup_path)
    except OSError as e:
        raise StoreIOError(f"Error backing up {path}: {e}") from e

    try:
        binary_data = vdf.binary_dumps(data)
        with open(path, 'wb') as f:
            f.write(binary_data)
            f.flush()
            os.fsync(f.fileno())  # Force write to disk

        # Validate write
        validation_data = load_shortcuts_vdf(path)
        expected_count = len(data.get('shortcuts', {}))
        actual_count = len(validation_data.get('shortcuts', {}))
        if actual_count != expected_count:
            raise StoreIOError(
                f"Write validation failed for {path}: expected {expected_count} shortcuts, got {actual_count}"
            )
    except Exception as e:
        _restore_previous(path, backup_path, has_backup)
        if isinstance(e, StoreIOError):
            raise
        raise StoreIOError(f"Error saving {path}: {e}") from e

    logger.info(f"Write validated: {actual_count} shortcuts persisted to {path}")


def _restore_previous(path: str, backup_path: str, has_backup: bool) -> None:
    """Put back the file that was there before a failed save."""
    try:
        if has_backup:
            shutil.copyfile(backup_path, path)
            logger.warning(f"Restored {path} from backup after failed write")
        elif os.path.exists(path):
            os.remove(path)
    except OSError as e:
        logger.error(f"Could not restore {path} from {backup_path}: {e}")
