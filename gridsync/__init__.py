# gridsync
# Merges installed Epic/Legendary games into Steam shortcuts and fills in their SteamGridDB artwork.

__version__ = "0.1.0"
