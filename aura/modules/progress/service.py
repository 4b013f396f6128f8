# aura/modules/progress/service.py
"""
User progress, recomputed on every read from the tests and mood entries
already stored. Nothing progress-specific is persisted.
"""
from typing import Dict

from aura.engine.progress import ActivityStats, build_progress, longest_streak
from aura.modules.assessment.repository import AssessmentRepository
from aura.modules.mood.repository import MoodRepository
from aura.shared.models import User

assessment_repo = AssessmentRepository()
mood_repo = MoodRepository()


class ProgressService:

    async def get_progress(self, db, user: User) -> Dict:
        mood_days = await mood_repo.get_days(db, user.id)
        test_days = [t.date() for t in await assessment_repo.get_activity_times(db, user.id)]

        stats = ActivityStats(
            tests_completed=await assessment_repo.count_completed(db, user.id),
            mood_entries_logged=await mood_repo.count(db, user.id),
            insights_generated=await assessment_repo.count_with_insights(db, user.id),
            days_active=len(set(test_days) | set(mood_days)),
            longest_mood_streak=longest_streak(mood_days),
        )
        return build_progress(stats)
