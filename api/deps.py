# api/deps.py
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agents.migrator.agent import MigratorAgent, build_readers
from models.database import get_session
from resolution.store import ArtistStore, SqlAlchemyArtistStore


def get_artist_store(session: AsyncSession = Depends(get_session)) -> ArtistStore:
    return SqlAlchemyArtistStore(session)


def get_migrator(session: AsyncSession = Depends(get_session)) -> MigratorAgent:
    return MigratorAgent(SqlAlchemyArtistStore(session), build_readers(session))
