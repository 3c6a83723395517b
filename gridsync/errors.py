"""Error kinds raised across gridsync.

Per-platform, per-lookup and per-artwork-type errors are isolated by their
callers. StoreIOError is terminal for the current Steam user only.
"""


class GridSyncError(Exception):
    """Base class for all gridsync errors"""


class PlatformUnavailable(GridSyncError):
    """A platform's manifests or launcher could not be read"""

    def __init__(self, platform: str, reason: str):
        super().__init__(f"{platform}: {reason}")
        self.platform = platform
        self.reason = reason


class RemoteSearchError(GridSyncError):
    """A single SteamGridDB search failed (network, service or timeout)"""


class RemoteBatchQueryError(GridSyncError):
    """A batched SteamGridDB image query failed for one artwork type"""


class DownloadError(GridSyncError):
    """Fetching one image failed"""


class StoreIOError(GridSyncError):
    """shortcuts.vdf, the grid folder or the search cache could not be read or written"""


class SteamFolderNotFound(GridSyncError):
    def __init__(self, location_tried: str):
        super().__init__(
            f"Could not find steam user data at location: {location_tried}  "
            "Please specify it in the configuration"
        )
        self.location_tried = location_tried


class SteamUsersDataEmpty(GridSyncError):
    def __init__(self, location_tried: str):
        super().__init__(
            f"Steam users data folder is empty: {location_tried}  "
            "Please specify it in the configuration"
        )
        self.location_tried = location_tried
