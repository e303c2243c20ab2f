# migrations/versions/002_identity_graph.py
"""source map, merge candidates and migration log

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None

def upgrade():
    # One row per source record, pointing at its canonical artist
    op.create_table('artist_source_map',
        sa.Column('mapping_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('source_system', sa.String(length=50), nullable=False),
        sa.Column('source_table', sa.String(length=100), nullable=False),
        sa.Column('source_record_id', sa.String(length=200), nullable=False),
        sa.Column('artist_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('match_confidence', sa.Float(), nullable=False),
        sa.Column('match_method', sa.String(length=30), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("match_method IN ('slug', 'exact-name', 'fuzzy-name', 'new-creation', 'manual-review')", name="valid_match_method"),
        sa.ForeignKeyConstraint(['artist_id'], ['canonical_artists.artist_id'], ),
        sa.PrimaryKeyConstraint('mapping_id'),
        sa.UniqueConstraint('source_system', 'source_record_id', name='uq_source_record')
    )

    # Ambiguous matches waiting for a human
    op.create_table('artist_merge_candidates',
        sa.Column('candidate_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('artist_a_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('artist_b_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('source_system', sa.String(length=50), nullable=False),
        sa.Column('source_record_id', sa.String(length=200), nullable=False),
        sa.Column('candidate_name', sa.String(length=300), nullable=False),
        sa.Column('source_payload', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('match_score', sa.Float(), nullable=False),
        sa.Column('match_reasons', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('status', sa.String(length=20), server_default=sa.text("'pending'"), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_by', sa.String(length=200), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="valid_candidate_status"),
        sa.ForeignKeyConstraint(['artist_a_id'], ['canonical_artists.artist_id'], ),
        sa.ForeignKeyConstraint(['artist_b_id'], ['canonical_artists.artist_id'], ),
        sa.PrimaryKeyConstraint('candidate_id')
    )

    # Append-only audit trail
    op.create_table('artist_migration_log',
        sa.Column('log_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('operation', sa.String(length=30), nullable=False),
        sa.Column('source_system', sa.String(length=50), nullable=True),
        sa.Column('source_record_id', sa.String(length=200), nullable=True),
        sa.Column('target_artist_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('details', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('success', sa.Boolean(), server_default=sa.text('true'), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('log_id')
    )

    op.create_index('idx_source_map_artist', 'artist_source_map', ['artist_id'], unique=False)
    op.create_index('idx_merge_candidates_status', 'artist_merge_candidates', ['status'], unique=False)
    op.create_index('idx_merge_candidates_source', 'artist_merge_candidates', ['source_system', 'source_record_id'], unique=False)
    op.create_index('idx_migration_log_created', 'artist_migration_log', ['created_at'], unique=False)

def downgrade():
    op.drop_table('artist_migration_log')
    op.drop_table('artist_merge_candidates')
    op.drop_table('artist_source_map')
