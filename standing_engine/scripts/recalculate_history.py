"""
Academic History Recalculation Script

Recompute cumulative GPA, level and standing from finalized semester records,
for one student or for every student with an academic history. Each student is
processed in its own transaction.
Usage: python -m standing_engine.scripts.recalculate_history [--student UUID | --all]
"""
import asyncio
import argparse
import logging
import sys
from uuid import UUID

from sqlalchemy import select

from standing_engine.database import AsyncSessionLocal, engine
from standing_engine.models.academic_history import AcademicHistory
from standing_engine.schemas.academic import LevelChanged, NoFinalizedSemesters
from standing_engine.services.academic_history_service import AcademicHistoryService
from standing_engine.services.errors import AcademicEngineError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def recalculate_student(student_id: UUID) -> bool:
    """Recalculate one student's history. Returns False if the student failed."""
    async with AsyncSessionLocal() as session:
        service = AcademicHistoryService(session)
        try:
            history = await service.get_academic_history(student_id, for_update=True)
            cumulative = await service.recompute_cumulative(history)

            if isinstance(cumulative, NoFinalizedSemesters):
                print(f"  {student_id}: no finalized semesters, nothing to update")
                await session.rollback()
                return True

            level = await service.apply_level_progression(history)
            standing = await service.apply_standing(history)
            await session.commit()
        except AcademicEngineError as e:
            await session.rollback()
            print(f"  {student_id}: FAILED [{e.code}] {e.message}")
            return False

    level_text = (
        f"level {level.previous_level} -> {level.new_level}"
        if isinstance(level, LevelChanged)
        else f"level {level.current_level}"
    )
    print(
        f"  {student_id}: CGPA {cumulative.cumulative_gpa}, "
        f"{cumulative.total_credits_earned} credits earned, {level_text}, {standing.value}"
    )
    return True


async def recalculate_all() -> int:
    """Recalculate every student with an academic history. Returns failure count."""
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(AcademicHistory.student_id))
        student_ids = list(result.scalars().all())

    print(f"\n=== Recalculating {len(student_ids)} academic histories ===")

    failures = 0
    for student_id in student_ids:
        if not await recalculate_student(student_id):
            failures += 1

    print(f"\n✅ Recalculation complete: {len(student_ids) - failures} succeeded, {failures} failed")
    return failures


async def main():
    """CLI entry point"""
    parser = argparse.ArgumentParser(description="Recalculate cumulative GPA, level and standing")
    parser.add_argument(
        "--student",
        "-s",
        type=UUID,
        help="Recalculate a single student's history"
    )
    parser.add_argument(
        "--all",
        "-a",
        action="store_true",
        help="Recalculate every student with an academic history"
    )

    args = parser.parse_args()

    try:
        if args.all:
            failures = await recalculate_all()
        elif args.student:
            print(f"\n=== Recalculating academic history for {args.student} ===")
            failures = 0 if await recalculate_student(args.student) else 1
        else:
            print("ERROR: Specify --student or --all")
            parser.print_help()
            sys.exit(1)
    finally:
        await engine.dispose()

    if failures:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
