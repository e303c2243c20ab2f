# models/sources.py - tables owned by upstream systems, read-only here
from sqlalchemy import Column, String, Text, Integer, DateTime, ARRAY
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func
import uuid

from models.database import Base

class DjArtist(Base):
    """Knowledge-base export row"""
    __tablename__ = "dj_artists"

    id = Column(Integer, primary_key=True)
    artist_name = Column(String(300), nullable=False)
    real_name = Column(String(300))
    nationality = Column(String(200))
    born = Column(String(50))
    died = Column(String(50))
    years_active = Column(String(100))
    rank = Column(Integer, nullable=False)
    labels = Column(ARRAY(String))
    subgenres = Column(ARRAY(String))
    top_tracks = Column(ARRAY(String))
    known_for = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ContentSync(Base):
    """Photo/content synchronization feed row"""
    __tablename__ = "content_sync"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(String(300), nullable=False)
    original_data = Column(JSONB, nullable=False)
    verified_data = Column(JSONB)
    corrections = Column(JSONB)
    photo_url = Column(Text)
    photo_source = Column(String(200))
    status = Column(String(30), nullable=False)
    last_synced_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
