# models/identity.py
from sqlalchemy import Column, String, Text, Float, Boolean, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func
import uuid

from models.database import Base

class ArtistSourceMap(Base):
    __tablename__ = "artist_source_map"

    mapping_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    source_system = Column(String(50), nullable=False)
    source_table = Column(String(100), nullable=False)
    source_record_id = Column(String(200), nullable=False)
    artist_id = Column(UUID(as_uuid=True), ForeignKey("canonical_artists.artist_id"), nullable=True)
    match_confidence = Column(Float, nullable=False)
    match_method = Column(String(30), nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("source_system", "source_record_id", name="uq_source_record"),
        CheckConstraint(
            "match_method IN ('slug', 'exact-name', 'fuzzy-name', 'new-creation', 'manual-review')",
            name="valid_match_method"
        ),
    )


class ArtistMergeCandidate(Base):
    __tablename__ = "artist_merge_candidates"

    candidate_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    artist_a_id = Column(UUID(as_uuid=True), ForeignKey("canonical_artists.artist_id"), nullable=False)
    # Empty while the incoming record has no canonical artist of its own
    artist_b_id = Column(UUID(as_uuid=True), ForeignKey("canonical_artists.artist_id"), nullable=True)
    source_system = Column(String(50), nullable=False)
    source_record_id = Column(String(200), nullable=False)
    candidate_name = Column(String(300), nullable=False)
    source_payload = Column(JSONB)
    match_score = Column(Float, nullable=False)
    match_reasons = Column(JSONB)
    status = Column(String(20), default="pending", nullable=False)
    reviewed_at = Column(DateTime(timezone=True))
    reviewed_by = Column(String(200))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="valid_candidate_status"),
    )


class ArtistMigrationLog(Base):
    __tablename__ = "artist_migration_log"

    log_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    operation = Column(String(30), nullable=False)
    source_system = Column(String(50))
    source_record_id = Column(String(200))
    # No foreign key: dry runs log artist ids that were never written
    target_artist_id = Column(UUID(as_uuid=True))
    details = Column(JSONB)
    success = Column(Boolean, default=True)
    error_message = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
