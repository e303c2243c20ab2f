# models/artist.py
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from models.database import Base

class CanonicalArtist(Base):
    __tablename__ = "canonical_artists"

    artist_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    canonical_name = Column(String(300), nullable=False)
    sort_name = Column(String(300), nullable=False)
    slug = Column(String(300), unique=True, nullable=False)
    real_name = Column(String(300))
    city = Column(String(200))
    country = Column(String(200))
    region = Column(String(100))
    active_years = Column(String(100))
    rank = Column(Integer)
    is_active = Column(Boolean, default=True)
    needs_review = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    profiles = relationship("ArtistProfile", back_populates="artist", order_by="ArtistProfile.created_at")
    assets = relationship("ArtistAsset", back_populates="artist", order_by="ArtistAsset.created_at")
    gear = relationship("ArtistGear", back_populates="artist", order_by="ArtistGear.created_at")
    aliases = relationship("ArtistAlias", back_populates="artist", order_by="ArtistAlias.created_at")


class ArtistAlias(Base):
    __tablename__ = "artist_aliases"

    alias_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    artist_id = Column(UUID(as_uuid=True), ForeignKey("canonical_artists.artist_id", ondelete="CASCADE"), nullable=False)
    alias_name = Column(String(300), nullable=False)
    alias_type = Column(String(50))
    source_system = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    artist = relationship("CanonicalArtist", back_populates="aliases")
