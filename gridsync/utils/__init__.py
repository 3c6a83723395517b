"""Path, Steam user and artwork helpers."""

from .artwork import ArtworkType, convert_to_unsigned_appid, get_missing_artwork_types, list_local_artwork
from .steam_user import SteamUser, get_steam_users
