# models/__init__.py
from models.artist import ArtistAlias, CanonicalArtist
from models.artist_asset import ArtistAsset, ArtistGear
from models.artist_profile import ArtistProfile
from models.identity import ArtistMergeCandidate, ArtistMigrationLog, ArtistSourceMap
from models.sources import ContentSync, DjArtist
from models.database import Base, engine, AsyncSessionLocal, get_session

__all__ = [
    "CanonicalArtist",
    "ArtistAlias",
    "ArtistProfile",
    "ArtistAsset",
    "ArtistGear",
    "ArtistSourceMap",
    "ArtistMergeCandidate",
    "ArtistMigrationLog",
    "DjArtist",
    "ContentSync",
    "Base",
    "engine",
    "AsyncSessionLocal",
    "get_session",
]
