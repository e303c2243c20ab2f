"""
Print reconciliation status and validation findings.

Usage:
    python scripts/migration_report.py
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from agents.migrator.agent import MigrationAction, MigrationRequest, MigratorAgent, build_readers
from models.database import AsyncSessionLocal
from resolution.errors import ReconciliationError
from resolution.store import SqlAlchemyArtistStore


def print_status(status: dict):
    canonical = status["canonical"]
    print("\n📊 Canonical store:")
    print(f"  👤 Artists:          {canonical['artists']}")
    print(f"  📝 Profiles:         {canonical['profiles']}")
    print(f"  🔗 Source mappings:  {canonical['sourceMappings']}")
    print(f"  🕵️  Pending reviews:  {canonical['pendingReviews']}")

    print("\n📥 Sources (rows / mapped):")
    mapped = status["mappingsBySource"]
    for source_system, total in status["sources"].items():
        shown = "unavailable" if total is None else total
        print(f"  • {source_system:15} {shown} / {mapped.get(source_system, 0)}")


async def main():
    print("\n" + "="*70)
    print("🎛️  CANONICAL ARTISTS - MIGRATION REPORT")
    print("="*70)

    try:
        async with AsyncSessionLocal() as session:
            agent = MigratorAgent(SqlAlchemyArtistStore(session), build_readers(session))
            status = await agent.run(MigrationRequest(action=MigrationAction.STATUS))
            validation = await agent.run(MigrationRequest(action=MigrationAction.VALIDATE))
    except ReconciliationError as e:
        print(f"\n❌ Could not build report: {e}")
        sys.exit(1)

    print_status(status.status)

    print("\n🔍 Validation:")
    if validation.success:
        print("  ✅ No problems found")
    else:
        for finding in validation.errors:
            print(f"  ❌ {finding}")

    print("\n" + "="*70 + "\n")
    if not validation.success:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
