"""
Resolution engine: decides, per source record, whether it belongs to an
existing canonical artist, needs a new one, or needs a human to decide.

Lookup order (first hit wins):

1. source map      - a record seen before keeps its artist even if renamed
2. slug            - ``slugify(name)`` equals a canonical slug
3. fuzzy name      - best ``score`` over the catalog, by decision band
4. creation        - nothing matched well enough
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from resolution.errors import InvalidSourceRecordError, ReviewStateError, SlugConflictError
from resolution.normalizer import normalize, slugify, sort_key
from resolution.priority import DEFAULT_PRIORITY_TABLE, SourcePriorityTable
from resolution.schemas import (
    ArtistCandidate,
    MatchMethod,
    MergeCandidateDraft,
    MigrationLogEntry,
    NewArtist,
    ResolutionAction,
    ResolutionOutcome,
    SourceLink,
    SourceRecord,
)
from resolution.scoring import DEFAULT_BANDS, CandidateMatch, MatchBand, MatchBands, best_match
from resolution.store import ArtistStore

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """Per-record create / merge / update / flag decisions against an ArtistStore"""

    def __init__(
        self,
        store: ArtistStore,
        priorities: SourcePriorityTable = DEFAULT_PRIORITY_TABLE,
        bands: MatchBands = DEFAULT_BANDS,
        conflict_retries: int = 1,
    ):
        self.store = store
        self.priorities = priorities
        self.bands = bands
        self.conflict_retries = conflict_retries

    async def resolve(self, record: SourceRecord) -> ResolutionOutcome:
        """Resolve one source record and write the result through the store.

        Raises ``ResolutionError`` for records that cannot be resolved and
        ``StoreError`` when a write fails; the caller decides whether that
        stops anything beyond this record.
        """
        self._validate(record)
        priority = self.priorities.priority_for(record.source_system)

        attempt = 0
        while True:
            try:
                return await self._resolve_once(record, priority)
            except SlugConflictError as e:
                # Another writer created the slug between our lookup and insert;
                # its row is visible now, so a fresh pass links to it.
                if attempt >= self.conflict_retries:
                    raise
                attempt += 1
                logger.warning(
                    f"Slug race on '{e.slug}' for {record.source_system}:{record.source_record_id}, "
                    f"retrying lookup ({attempt}/{self.conflict_retries})"
                )

    def _validate(self, record: SourceRecord) -> None:
        if not record.source_record_id.strip():
            raise InvalidSourceRecordError(record.source_system, record.source_record_id, "empty source record id")
        if not normalize(record.candidate_name) or not slugify(record.candidate_name):
            raise InvalidSourceRecordError(
                record.source_system, record.source_record_id, f"unusable artist name {record.candidate_name!r}"
            )

    async def _resolve_once(self, record: SourceRecord, priority: int) -> ResolutionOutcome:
        link = await self.store.find_mapping(record.source_system, record.source_record_id)
        if link:
            await self._attach(link.artist_id, record, priority, link.match_confidence)
            await self._log("update", record, link.artist_id, {"match_method": link.match_method.value})
            logger.debug(f"Updated {record.source_system}:{record.source_record_id} on {link.artist_id}")
            return ResolutionOutcome(
                action=ResolutionAction.UPDATED,
                source_system=record.source_system,
                source_record_id=record.source_record_id,
                artist_id=link.artist_id,
                match_method=link.match_method,
                confidence=link.match_confidence,
            )

        slug = slugify(record.candidate_name)
        existing = await self.store.find_artist_by_slug(slug)
        if existing:
            return await self._link(record, priority, existing, MatchMethod.SLUG, 1.0)

        # TODO: bucket candidates by first letter once the catalog passes a few thousand artists
        match = best_match(record.candidate_name, await self.store.list_candidates())
        band = self.bands.classify(match.score) if match else MatchBand.NO_MATCH

        if band is MatchBand.AUTO_LINK:
            method = MatchMethod.EXACT_NAME if match.score >= 1.0 else MatchMethod.FUZZY_NAME
            return await self._link(record, priority, match.candidate, method, match.score)

        if band is MatchBand.REVIEW:
            return await self._flag(record, match)

        return await self._create(record, priority, slug)

    # -------------------------------------------------------------------------
    # Decisions
    # -------------------------------------------------------------------------

    async def _link(
        self,
        record: SourceRecord,
        priority: int,
        artist: ArtistCandidate,
        method: MatchMethod,
        confidence: float,
    ) -> ResolutionOutcome:
        await self.store.link_source(
            SourceLink(
                source_system=record.source_system,
                source_record_id=record.source_record_id,
                artist_id=artist.artist_id,
                match_confidence=confidence,
                match_method=method,
            ),
            record.source_table,
        )
        await self._attach(artist.artist_id, record, priority, confidence)
        await self._log("merge", record, artist.artist_id, {
            "match_method": method.value,
            "confidence": confidence,
            "canonical_name": artist.canonical_name,
            "candidate_name": record.candidate_name,
        })
        logger.info(
            f"Merged {record.source_system}:{record.source_record_id} '{record.candidate_name}' "
            f"into '{artist.slug}' via {method.value} ({confidence:.2f})"
        )
        return ResolutionOutcome(
            action=ResolutionAction.MERGED,
            source_system=record.source_system,
            source_record_id=record.source_record_id,
            artist_id=artist.artist_id,
            match_method=method,
            confidence=confidence,
        )

    async def _flag(self, record: SourceRecord, match: CandidateMatch) -> ResolutionOutcome:
        draft = MergeCandidateDraft(
            artist_a_id=match.candidate.artist_id,
            source_system=record.source_system,
            source_record_id=record.source_record_id,
            candidate_name=record.candidate_name,
            match_score=match.score,
            match_reasons=[{
                "type": "fuzzy_name",
                "rule": match.rule.value,
                "source_name": record.candidate_name,
                "canonical_name": match.candidate.canonical_name,
                "canonical_slug": match.candidate.slug,
                "score": match.score,
            }],
            # Whole record, so an approval can replay it later
            source_payload=record.model_dump(mode="json"),
        )

        pending = await self.store.find_pending_candidate(record.source_system, record.source_record_id)
        if pending:
            candidate_id = pending.candidate_id
            await self.store.refresh_merge_candidate(candidate_id, draft)
        else:
            candidate_id = await self.store.add_merge_candidate(draft)
        await self.store.mark_needs_review(match.candidate.artist_id, True)

        await self._log("flag", record, match.candidate.artist_id, {
            "candidate_id": str(candidate_id),
            "score": match.score,
            "canonical_name": match.candidate.canonical_name,
            "candidate_name": record.candidate_name,
        })
        logger.warning(
            f"Flagged {record.source_system}:{record.source_record_id} '{record.candidate_name}' "
            f"~ '{match.candidate.canonical_name}' ({match.score:.2f}) for review"
        )
        return ResolutionOutcome(
            action=ResolutionAction.FLAGGED,
            source_system=record.source_system,
            source_record_id=record.source_record_id,
            confidence=match.score,
            candidate_id=candidate_id,
        )

    async def _create(self, record: SourceRecord, priority: int, slug: str) -> ResolutionOutcome:
        name = record.candidate_name.strip()
        fields = record.artist
        artist_id = await self.store.create_artist(NewArtist(
            canonical_name=name,
            sort_name=sort_key(name),
            slug=slug,
            real_name=fields.real_name,
            city=fields.city,
            country=fields.country,
            region=fields.region,
            active_years=fields.active_years,
            rank=fields.rank,
        ))
        await self.store.link_source(
            SourceLink(
                source_system=record.source_system,
                source_record_id=record.source_record_id,
                artist_id=artist_id,
                match_confidence=1.0,
                match_method=MatchMethod.NEW_CREATION,
            ),
            record.source_table,
        )
        await self._attach(artist_id, record, priority, 1.0)

        if fields.real_name and normalize(fields.real_name) != normalize(name):
            await self.store.add_alias(artist_id, fields.real_name.strip(), "real_name", record.source_system)

        await self._log("import", record, artist_id, {"artist_name": name, "slug": slug, "rank": fields.rank})
        logger.info(f"Created '{slug}' from {record.source_system}:{record.source_record_id}")
        return ResolutionOutcome(
            action=ResolutionAction.CREATED,
            source_system=record.source_system,
            source_record_id=record.source_record_id,
            artist_id=artist_id,
            match_method=MatchMethod.NEW_CREATION,
            confidence=1.0,
        )

    # -------------------------------------------------------------------------
    # Provenance-preserving writes
    # -------------------------------------------------------------------------

    async def _attach(self, artist_id: UUID, record: SourceRecord, priority: int, confidence: float) -> None:
        if record.profile is not None:
            await self.store.upsert_profile(
                artist_id,
                record.source_system,
                record.source_record_id,
                record.profile,
                priority,
                confidence,
                record.payload,
            )

        if record.asset is not None:
            is_primary = await self._claims_primary(artist_id, record, priority)
            await self.store.upsert_asset(
                artist_id, record.source_system, record.source_record_id, record.asset, is_primary
            )

        for gear in record.gear:
            await self.store.upsert_gear(artist_id, record.source_system, gear)

    async def _claims_primary(self, artist_id: UUID, record: SourceRecord, priority: int) -> bool:
        """Whether this record's asset becomes the artist's primary of its type"""
        asset_type = record.asset.asset_type
        current = await self.store.find_primary_asset(artist_id, asset_type)
        if current is None:
            return True
        if (current.source_system, current.source_record_id) == (record.source_system, record.source_record_id):
            return True
        if priority > self.priorities.get(current.source_system, 0):
            await self.store.clear_primary_asset(artist_id, asset_type)
            return True
        return False

    async def _log(self, operation: str, record: SourceRecord, artist_id: Optional[UUID], details: Dict[str, Any]) -> None:
        await self.store.append_log(MigrationLogEntry(
            operation=operation,
            source_system=record.source_system,
            source_record_id=record.source_record_id,
            target_artist_id=artist_id,
            details=details,
        ))

    # -------------------------------------------------------------------------
    # Review
    # -------------------------------------------------------------------------

    async def review_candidate(
        self, candidate_id: UUID, approve: bool, reviewed_by: Optional[str] = None
    ) -> Optional[ResolutionOutcome]:
        """Apply a human decision to a pending merge candidate.

        Approval links the flagged source record to the candidate artist and
        writes its profile; rejection only closes the candidate.
        """
        candidate = await self.store.get_merge_candidate(candidate_id)
        if candidate is None:
            raise ReviewStateError(f"Merge candidate {candidate_id} not found")
        if candidate.status != "pending":
            raise ReviewStateError(f"Merge candidate {candidate_id} is already {candidate.status}")

        record = SourceRecord.model_validate(candidate.source_payload)
        outcome = None

        if approve:
            priority = self.priorities.priority_for(record.source_system)
            await self.store.link_source(
                SourceLink(
                    source_system=record.source_system,
                    source_record_id=record.source_record_id,
                    artist_id=candidate.artist_a_id,
                    match_confidence=candidate.match_score,
                    match_method=MatchMethod.MANUAL_REVIEW,
                ),
                record.source_table,
            )
            await self._attach(candidate.artist_a_id, record, priority, candidate.match_score)
            outcome = ResolutionOutcome(
                action=ResolutionAction.MERGED,
                source_system=record.source_system,
                source_record_id=record.source_record_id,
                artist_id=candidate.artist_a_id,
                match_method=MatchMethod.MANUAL_REVIEW,
                confidence=candidate.match_score,
            )

        status = "approved" if approve else "rejected"
        await self.store.set_candidate_status(candidate_id, status, reviewed_by)
        if approve:
            await self.store.mark_needs_review(candidate.artist_a_id, False)
        await self._log("review", record, candidate.artist_a_id, {
            "candidate_id": str(candidate_id),
            "decision": status,
            "reviewed_by": reviewed_by,
        })
        logger.info(f"Merge candidate {candidate_id} {status}")
        return outcome
