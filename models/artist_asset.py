# models/artist_asset.py
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, ARRAY, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from models.database import Base

class ArtistAsset(Base):
    __tablename__ = "artist_assets"

    asset_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    artist_id = Column(UUID(as_uuid=True), ForeignKey("canonical_artists.artist_id", ondelete="CASCADE"), nullable=False)
    asset_type = Column(String(30), nullable=False, default="photo")
    url = Column(Text, nullable=False)
    alt_text = Column(Text)
    author = Column(String(300))
    license = Column(String(100))
    license_url = Column(Text)
    source_url = Column(Text)
    source_name = Column(String(200))
    copyright_status = Column(String(30), default="unknown")
    # One primary per artist and asset type; kept by the resolution engine
    is_primary = Column(Boolean, default=False)
    source_system = Column(String(50), nullable=False)
    source_record_id = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    artist = relationship("CanonicalArtist", back_populates="assets")

    __table_args__ = (
        UniqueConstraint("artist_id", "source_system", "source_record_id", name="uq_asset_source_record"),
    )


class ArtistGear(Base):
    __tablename__ = "artist_gear"

    gear_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    artist_id = Column(UUID(as_uuid=True), ForeignKey("canonical_artists.artist_id", ondelete="CASCADE"), nullable=False)
    gear_category = Column(String(30), nullable=False)
    gear_items = Column(ARRAY(String))
    rider_notes = Column(Text)
    source_system = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    artist = relationship("CanonicalArtist", back_populates="gear")

    __table_args__ = (
        UniqueConstraint("artist_id", "gear_category", "source_system", name="uq_gear_category_source"),
    )
