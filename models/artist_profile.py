# models/artist_profile.py
from sqlalchemy import Column, String, Text, Integer, Float, DateTime, ForeignKey, ARRAY, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from models.database import Base

class ArtistProfile(Base):
    __tablename__ = "artist_profiles"

    profile_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    artist_id = Column(UUID(as_uuid=True), ForeignKey("canonical_artists.artist_id", ondelete="CASCADE"), nullable=False)
    bio_long = Column(Text)
    bio_short = Column(Text)
    press_notes = Column(Text)
    known_for = Column(Text)
    labels = Column(ARRAY(String))
    collaborators = Column(ARRAY(String))
    influences = Column(ARRAY(String))
    crews = Column(ARRAY(String))
    subgenres = Column(ARRAY(String))
    tags = Column(ARRAY(String))
    top_tracks = Column(ARRAY(String))
    career_highlights = Column(ARRAY(Text))
    key_releases = Column(JSONB)
    social_links = Column(JSONB)

    # Provenance
    source_system = Column(String(50), nullable=False)
    source_record_id = Column(String(200), nullable=False)
    source_priority = Column(Integer, nullable=False)
    confidence_score = Column(Float, nullable=False)
    source_payload = Column(JSONB)
    last_synced_at = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    artist = relationship("CanonicalArtist", back_populates="profiles")

    __table_args__ = (
        UniqueConstraint("artist_id", "source_system", "source_record_id", name="uq_profile_source_record"),
        CheckConstraint(
            "confidence_score >= 0 AND confidence_score <= 1",
            name="profile_confidence_range"
        ),
    )
