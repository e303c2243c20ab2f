# migrations/versions/001_canonical_schema.py
"""canonical artist schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Tabela canonical_artists
    op.create_table('canonical_artists',
        sa.Column('artist_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('canonical_name', sa.String(length=300), nullable=False),
        sa.Column('sort_name', sa.String(length=300), nullable=False),
        sa.Column('slug', sa.String(length=300), nullable=False),
        sa.Column('real_name', sa.String(length=300), nullable=True),
        sa.Column('city', sa.String(length=200), nullable=True),
        sa.Column('country', sa.String(length=200), nullable=True),
        sa.Column('region', sa.String(length=100), nullable=True),
        sa.Column('active_years', sa.String(length=100), nullable=True),
        sa.Column('rank', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=True),
        sa.Column('needs_review', sa.Boolean(), server_default=sa.text('false'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('artist_id'),
        sa.UniqueConstraint('slug')
    )

    # Tabela artist_profiles
    op.create_table('artist_profiles',
        sa.Column('profile_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('artist_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('bio_long', sa.Text(), nullable=True),
        sa.Column('bio_short', sa.Text(), nullable=True),
        sa.Column('press_notes', sa.Text(), nullable=True),
        sa.Column('known_for', sa.Text(), nullable=True),
        sa.Column('labels', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('collaborators', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('influences', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('crews', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('subgenres', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('tags', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('top_tracks', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('career_highlights', postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column('key_releases', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('social_links', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('source_system', sa.String(length=50), nullable=False),
        sa.Column('source_record_id', sa.String(length=200), nullable=False),
        sa.Column('source_priority', sa.Integer(), nullable=False),
        sa.Column('confidence_score', sa.Float(), nullable=False),
        sa.Column('source_payload', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('last_synced_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("confidence_score >= 0 AND confidence_score <= 1", name="profile_confidence_range"),
        sa.ForeignKeyConstraint(['artist_id'], ['canonical_artists.artist_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('profile_id'),
        sa.UniqueConstraint('artist_id', 'source_system', 'source_record_id', name='uq_profile_source_record')
    )

    # Tabela artist_assets
    op.create_table('artist_assets',
        sa.Column('asset_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('artist_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('asset_type', sa.String(length=30), server_default=sa.text("'photo'"), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('alt_text', sa.Text(), nullable=True),
        sa.Column('author', sa.String(length=300), nullable=True),
        sa.Column('license', sa.String(length=100), nullable=True),
        sa.Column('license_url', sa.Text(), nullable=True),
        sa.Column('source_url', sa.Text(), nullable=True),
        sa.Column('source_name', sa.String(length=200), nullable=True),
        sa.Column('copyright_status', sa.String(length=30), server_default=sa.text("'unknown'"), nullable=True),
        sa.Column('is_primary', sa.Boolean(), server_default=sa.text('false'), nullable=True),
        sa.Column('source_system', sa.String(length=50), nullable=False),
        sa.Column('source_record_id', sa.String(length=200), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['artist_id'], ['canonical_artists.artist_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('asset_id'),
        sa.UniqueConstraint('artist_id', 'source_system', 'source_record_id', name='uq_asset_source_record')
    )

    # Tabela artist_gear
    op.create_table('artist_gear',
        sa.Column('gear_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('artist_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('gear_category', sa.String(length=30), nullable=False),
        sa.Column('gear_items', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('rider_notes', sa.Text(), nullable=True),
        sa.Column('source_system', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['artist_id'], ['canonical_artists.artist_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('gear_id'),
        sa.UniqueConstraint('artist_id', 'gear_category', 'source_system', name='uq_gear_category_source')
    )

    # Tabela artist_aliases
    op.create_table('artist_aliases',
        sa.Column('alias_id', postgresql.UUID(as_uuid=True), server_default=sa.text('uuid_generate_v4()'), nullable=False),
        sa.Column('artist_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('alias_name', sa.String(length=300), nullable=False),
        sa.Column('alias_type', sa.String(length=50), nullable=True),
        sa.Column('source_system', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['artist_id'], ['canonical_artists.artist_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('alias_id')
    )

    # Índices
    op.create_index('idx_canonical_artists_name', 'canonical_artists', ['canonical_name'], unique=False)
    op.create_index('idx_canonical_artists_review', 'canonical_artists', ['needs_review'], unique=False)
    op.create_index('idx_profiles_artist', 'artist_profiles', ['artist_id'], unique=False)
    op.create_index('idx_assets_artist_type', 'artist_assets', ['artist_id', 'asset_type'], unique=False)
    op.create_index('idx_gear_artist', 'artist_gear', ['artist_id'], unique=False)
    op.create_index('idx_aliases_artist', 'artist_aliases', ['artist_id'], unique=False)

def downgrade():
    op.drop_table('artist_aliases')
    op.drop_table('artist_gear')
    op.drop_table('artist_assets')
    op.drop_table('artist_profiles')
    op.drop_table('canonical_artists')
