"""
The Migrator Agent - Batch reconciliation of source systems into canonical artists
"""

import asyncio
import json
import logging
import sys
import time
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from resolution.engine import ResolutionEngine
from resolution.errors import (
    InvalidSourceRecordError,
    ResolutionError,
    SourceFetchError,
    StoreError,
    TransientStoreError,
)
from resolution.priority import CONTENT_SYNC, DEFAULT_PRIORITY_TABLE, LEGACY, RAG, SourcePriorityTable
from resolution.schemas import MigrationLogEntry, ResolutionAction, ResolutionOutcome, SourceRecord
from resolution.sources import ContentSyncReader, LegacyCatalogReader, RagArtistReader, SourceReader
from resolution.store import ArtistStore, DryRunArtistStore

logger = logging.getLogger(__name__)


# =============================================================================
# MODELS
# =============================================================================

class MigrationAction(str, Enum):
    STATUS = "status"
    MIGRATE_LEGACY = "migrate_legacy"
    MIGRATE_RAG = "migrate_rag"
    MIGRATE_CONTENT_SYNC = "migrate_content_sync"
    MIGRATE_ALL = "migrate_all"
    VALIDATE = "validate"


# Source systems each migrate action walks, in order
ACTION_SOURCES = {
    MigrationAction.MIGRATE_LEGACY: (LEGACY,),
    MigrationAction.MIGRATE_RAG: (RAG,),
    MigrationAction.MIGRATE_CONTENT_SYNC: (CONTENT_SYNC,),
    MigrationAction.MIGRATE_ALL: (LEGACY, RAG, CONTENT_SYNC),
}


class MigrationRequest(BaseModel):
    """Batch trigger; accepts ``dryRun``/``batchSize``/``startFrom`` as well"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    action: MigrationAction
    dry_run: bool = False
    batch_size: int = Field(default_factory=lambda: settings.migration_batch_size, ge=1)
    start_from: int = Field(default=0, ge=0)


class MigrationStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    processed: int = 0
    created: int = 0
    updated: int = 0
    merged: int = 0
    errors: int = 0
    flagged_for_review: int = Field(default=0, alias="flaggedForReview")

    def count(self, outcome: ResolutionOutcome) -> None:
        if outcome.action is ResolutionAction.CREATED:
            self.created += 1
        elif outcome.action is ResolutionAction.MERGED:
            self.merged += 1
        elif outcome.action is ResolutionAction.UPDATED:
            self.updated += 1
        elif outcome.action is ResolutionAction.FLAGGED:
            self.flagged_for_review += 1


class MigrationResult(BaseModel):
    success: bool
    action: MigrationAction
    stats: MigrationStats = Field(default_factory=MigrationStats)
    errors: Optional[List[str]] = None
    status: Optional[Dict[str, Any]] = None
    duration_ms: int = 0
    # A page fetch failed and the run stopped early
    aborted: bool = Field(default=False, exclude=True)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def build_readers(session: AsyncSession) -> Dict[str, SourceReader]:
    """Default reader per source system"""
    return {
        LEGACY: LegacyCatalogReader(settings.legacy_catalog_path),
        RAG: RagArtistReader(session),
        CONTENT_SYNC: ContentSyncReader(session),
    }


# =============================================================================
# MIGRATOR AGENT
# =============================================================================

class MigratorAgent:
    """The Migrator - Pages source systems through the resolution engine"""

    def __init__(
        self,
        store: ArtistStore,
        readers: Dict[str, SourceReader],
        priorities: SourcePriorityTable = DEFAULT_PRIORITY_TABLE,
        record_retries: Optional[int] = None,
        retry_backoff_seconds: Optional[float] = None,
    ):
        self.store = store
        self.readers = readers
        self.priorities = priorities
        self.record_retries = settings.migration_record_retries if record_retries is None else record_retries
        self.retry_backoff_seconds = (
            settings.migration_retry_backoff_seconds if retry_backoff_seconds is None else retry_backoff_seconds
        )
        self.logger = logging.getLogger("migrator_agent")
        self._cancel_requested = False

    def cancel(self) -> None:
        """Stop the running migration at the next page boundary"""
        self.logger.warning("Cancellation requested, stopping at next page boundary")
        self._cancel_requested = True

    async def run(self, request: MigrationRequest) -> MigrationResult:
        started = time.monotonic()
        self.logger.info(
            f"Starting {request.action.value} (dry_run={request.dry_run}, "
            f"batch_size={request.batch_size}, start_from={request.start_from})"
        )

        try:
            if request.action is MigrationAction.STATUS:
                result = await self._status()
            elif request.action is MigrationAction.VALIDATE:
                result = await self._validate()
            else:
                result = await self._migrate(request)
        finally:
            self._cancel_requested = False

        result.duration_ms = int((time.monotonic() - started) * 1000)
        stats = result.stats
        self.logger.info(
            f"Finished {request.action.value} in {result.duration_ms}ms: processed={stats.processed} "
            f"created={stats.created} merged={stats.merged} updated={stats.updated} "
            f"flagged={stats.flagged_for_review} errors={stats.errors}"
        )
        return result

    # -------------------------------------------------------------------------
    # Migration
    # -------------------------------------------------------------------------

    async def _migrate(self, request: MigrationRequest) -> MigrationResult:
        store = DryRunArtistStore(self.store) if request.dry_run else self.store
        engine = ResolutionEngine(store, self.priorities)
        stats = MigrationStats()
        errors: List[str] = []
        aborted = False

        for source_system in ACTION_SOURCES[request.action]:
            reader = self.readers.get(source_system)
            if reader is None:
                errors.append(f"No reader configured for source system '{source_system}'")
                aborted = True
                break
            if not await self._migrate_source(engine, store, reader, request, stats, errors):
                aborted = True
                break

        if request.dry_run:
            self.logger.info(f"Dry run suppressed {store.suppressed_writes} writes")

        return MigrationResult(
            success=not errors,
            action=request.action,
            stats=stats,
            errors=errors or None,
            aborted=aborted,
        )

    async def _migrate_source(
        self,
        engine: ResolutionEngine,
        store: ArtistStore,
        reader: SourceReader,
        request: MigrationRequest,
        stats: MigrationStats,
        errors: List[str],
    ) -> bool:
        """Walk one source page by page; False when the run has to stop"""
        offset = request.start_from
        self.logger.info(f"Migrating {reader.source_system} from offset {offset}")

        while True:
            if self._cancel_requested:
                errors.append(f"Cancelled before {reader.source_system} offset {offset}")
                return False

            try:
                page = await reader.fetch_page(offset, request.batch_size)
            except SourceFetchError as e:
                self.logger.error(f"Aborting: {e}")
                errors.append(str(e))
                return False

            for row in page:
                stats.processed += 1
                try:
                    record = reader.to_record(row)
                except InvalidSourceRecordError as e:
                    await self._record_error(store, e.source_system, e.source_record_id, None, e, stats, errors)
                    continue
                await self._process(engine, store, record, stats, errors)

            self.logger.info(f"{reader.source_system}: page at offset {offset} done ({len(page)} records)")
            if len(page) < request.batch_size:
                return True
            offset += request.batch_size

    async def _process(
        self,
        engine: ResolutionEngine,
        store: ArtistStore,
        record: SourceRecord,
        stats: MigrationStats,
        errors: List[str],
    ) -> None:
        attempt = 0
        while True:
            try:
                outcome = await engine.resolve(record)
                await store.commit()
            except TransientStoreError as e:
                await store.rollback()
                if attempt < self.record_retries:
                    attempt += 1
                    self.logger.warning(
                        f"Transient store error on {record.source_system}:{record.source_record_id}, "
                        f"retry {attempt}/{self.record_retries}: {e}"
                    )
                    await asyncio.sleep(self.retry_backoff_seconds * attempt)
                    continue
                await self._record_error(
                    store, record.source_system, record.source_record_id, record.candidate_name, e, stats, errors
                )
                return
            except (ResolutionError, StoreError) as e:
                await store.rollback()
                await self._record_error(
                    store, record.source_system, record.source_record_id, record.candidate_name, e, stats, errors
                )
                return

            stats.count(outcome)
            return

    async def _record_error(
        self,
        store: ArtistStore,
        source_system: str,
        source_record_id: str,
        candidate_name: Optional[str],
        error: Exception,
        stats: MigrationStats,
        errors: List[str],
    ) -> None:
        message = f"{source_system}:{source_record_id}: {error}"
        self.logger.error(f"Record failed: {message}")
        stats.errors += 1
        errors.append(message)

        try:
            await store.append_log(MigrationLogEntry(
                operation="error",
                source_system=source_system,
                source_record_id=source_record_id,
                details={"candidate_name": candidate_name, "error_type": type(error).__name__},
                success=False,
                error_message=str(error),
            ))
            await store.commit()
        except StoreError as e:
            # The failure is already in the result; the log row is best effort
            await store.rollback()
            self.logger.error(f"Could not write error log entry for {source_record_id}: {e}")

    # -------------------------------------------------------------------------
    # Status and validation
    # -------------------------------------------------------------------------

    async def _status(self) -> MigrationResult:
        summary = await self.store.count_summary()
        errors = []
        sources = {}
        for source_system, reader in self.readers.items():
            try:
                sources[source_system] = await reader.count()
            except SourceFetchError as e:
                self.logger.warning(f"Could not count {source_system}: {e}")
                sources[source_system] = None
                errors.append(str(e))

        status = {
            "canonical": {
                "artists": summary["artists"],
                "profiles": summary["profiles"],
                "sourceMappings": summary["sourceMappings"],
                "pendingReviews": summary["pendingReviews"],
            },
            "sources": sources,
            "mappingsBySource": summary["mappingsBySource"],
        }
        return MigrationResult(
            success=not errors,
            action=MigrationAction.STATUS,
            errors=errors or None,
            status=status,
        )

    async def _validate(self) -> MigrationResult:
        findings = [f"Orphaned source mapping: {key}" for key in await self.store.find_orphan_mappings()]
        findings += [f"Artist without profiles: {slug}" for slug in await self.store.find_artists_without_profiles()]
        findings += [
            f"Multiple primary assets: {key}" for key in await self.store.find_duplicate_primary_assets()
        ]
        for finding in findings:
            self.logger.warning(finding)

        return MigrationResult(
            success=not findings,
            action=MigrationAction.VALIDATE,
            stats=MigrationStats(errors=len(findings)),
            errors=findings or None,
        )


# =============================================================================
# CLI
# =============================================================================

async def main() -> int:
    """CLI entry point"""
    import argparse
    from models.database import AsyncSessionLocal
    from resolution.store import SqlAlchemyArtistStore

    parser = argparse.ArgumentParser(description="Migrator Agent - Canonical Artist Reconciliation")
    parser.add_argument('--action', required=True, choices=[action.value for action in MigrationAction])
    parser.add_argument('--dry-run', action='store_true', help='Resolve without writing canonical data')
    parser.add_argument('--batch-size', type=int, default=settings.migration_batch_size)
    parser.add_argument('--start-from', type=int, default=0)
    parser.add_argument('--log-level', default=settings.log_level)

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    request = MigrationRequest(
        action=args.action,
        dry_run=args.dry_run,
        batch_size=args.batch_size,
        start_from=args.start_from,
    )

    async with AsyncSessionLocal() as session:
        agent = MigratorAgent(SqlAlchemyArtistStore(session), build_readers(session))
        result = await agent.run(request)

    print(json.dumps(result.to_response(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
