"""
Merge engine: reconciles one platform's installed games into a shortcut collection.

Shortcuts are owned by the platform whose tag they carry. A successful
platform read replaces that platform's shortcuts wholesale, so re-running with
the same output changes nothing and uninstalled games disappear. A failed read
leaves them untouched. Untagged shortcuts and other platforms' shortcuts are
never modified.
"""

import logging
from typing import Any, Dict

from ..errors import PlatformUnavailable
from ..stores.base import Platform
from .model import ShortcutCollection

logger = logging.getLogger(__name__)


async def merge_platform_shortcuts(collection: ShortcutCollection, platform: Platform) -> Dict[str, Any]:
    """Replace ``platform``'s shortcuts in ``collection`` with its current entries.

    Args:
        collection: The user's shortcuts, mutated in place
        platform: Platform source; skipped when not enabled

    Returns:
        dict: {success: bool, skipped: bool, added: int, removed: int, error: str}
    """
    tag = platform.name
    if not platform.enabled():
        logger.debug(f"[Merge] {tag} disabled, skipping")
        return {'success': True, 'skipped': True, 'added': 0, 'removed': 0}

    try:
        entries = await platform.get_shortcuts()
    except PlatformUnavailable as e:
        logger.error(f"[Merge] Error getting shortcuts from platform: {tag}: {e.reason}")
        return {'success': False, 'skipped': False, 'added': 0, 'removed': 0, 'error': str(e)}

    removed = collection.remove_tagged(tag)
    added = 0
    for entry in entries:
        shortcut = entry.to_shortcut(tag)
        if collection.add(shortcut):
            added += 1
        else:
            logger.warning(
                f"[Merge] {tag}: skipping '{entry.title}', appid {shortcut.app_id} already used by another shortcut"
            )

    logger.info(f"[Merge] {tag}: {added} shortcut(s) merged, {len(removed)} replaced")
    return {'success': True, 'skipped': False, 'added': added, 'removed': len(removed)}
