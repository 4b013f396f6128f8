# aura/engine/progress.py
"""
Progress and achievements: ZERO DB access.
Receives activity counts, returns levels, experience and achievement state.

Called by: modules/progress/service.py

Experience is derived, never stored: the same activity always gives the
same level.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

# --- EXPERIENCE PER ACTION ---
XP_TEST = 100
XP_MOOD = 10
XP_INSIGHTS = 25
XP_ACTIVE_DAY = 5

# Experience needed to reach level i + 1
LEVEL_THRESHOLDS = (
    0, 100, 250, 450, 700, 1000, 1350, 1750, 2200, 2700,
    3300, 4000, 4800, 5700, 6700, 7800, 9000, 10300, 11700, 13200,
)

LEVEL_TITLES = (
    "Novice Explorer",
    "Curious Mind",
    "Self-Observer",
    "Insight Seeker",
    "Pattern Recognizer",
    "Emotional Navigator",
    "Trait Analyst",
    "Personality Enthusiast",
    "Self-Awareness Adept",
    "Mindfulness Practitioner",
    "Emotional Intelligence Apprentice",
    "Growth Mindset Adopter",
    "Personality Voyager",
    "Trait Master",
    "Wisdom Seeker",
    "Emotional Sage",
    "Personality Virtuoso",
    "Self-Mastery Guide",
    "Enlightened Explorer",
    "Aura Luminary",
)

MAX_LEVEL = len(LEVEL_THRESHOLDS)


@dataclass(frozen=True)
class ActivityStats:
    tests_completed: int = 0
    mood_entries_logged: int = 0
    insights_generated: int = 0
    days_active: int = 0
    longest_mood_streak: int = 0


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    description: str
    category: str
    stat: str        # ActivityStats field the goal is measured on
    goal: int = 1

    def evaluate(self, stats: ActivityStats) -> Dict:
        value = getattr(stats, self.stat)
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "unlocked": value >= self.goal,
            "progress": min(value, self.goal),
            "max_progress": self.goal,
        }


ACHIEVEMENTS = (
    Achievement("first-test", "First Steps", "Complete your first personality test",
                "tests", "tests_completed"),
    Achievement("test-explorer", "Test Explorer", "Complete 5 personality tests",
                "tests", "tests_completed", 5),
    Achievement("test-master", "Test Master", "Complete 10 personality tests",
                "tests", "tests_completed", 10),
    Achievement("mood-tracker", "Mood Tracker", "Log your mood for the first time",
                "mood", "mood_entries_logged"),
    Achievement("mood-streak", "Mood Streak", "Log your mood for 7 consecutive days",
                "mood", "longest_mood_streak", 7),
    Achievement("mood-master", "Mood Master", "Log 30 mood entries",
                "mood", "mood_entries_logged", 30),
    Achievement("first-insight", "First Insight", "Generate insights from your test results",
                "insights", "insights_generated"),
    Achievement("insight-collector", "Insight Collector", "Generate insights 5 times",
                "insights", "insights_generated", 5),
)


def experience_for(stats: ActivityStats) -> int:
    return (
        stats.tests_completed * XP_TEST
        + stats.mood_entries_logged * XP_MOOD
        + stats.insights_generated * XP_INSIGHTS
        + stats.days_active * XP_ACTIVE_DAY
    )


def calculate_level(experience: int) -> int:
    """Highest level whose threshold is reached; 1 for anything below 100."""
    for i in range(MAX_LEVEL - 1, -1, -1):
        if experience >= LEVEL_THRESHOLDS[i]:
            return i + 1
    return 1


def next_level_experience(level: int) -> Optional[int]:
    """Threshold of the next level; None at the top level."""
    if level >= MAX_LEVEL:
        return None
    return LEVEL_THRESHOLDS[level]


def level_progress(experience: int, level: int) -> int:
    """Percent of the way from the current level to the next (100 at the top)."""
    if level >= MAX_LEVEL:
        return 100
    floor, ceiling = LEVEL_THRESHOLDS[level - 1], LEVEL_THRESHOLDS[level]
    return min(100, (experience - floor) * 100 // (ceiling - floor))


def level_title(level: int) -> str:
    return LEVEL_TITLES[max(1, min(level, MAX_LEVEL)) - 1]


def longest_streak(days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days."""
    best = run = 0
    previous = None
    for day in sorted(set(days)):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


def build_progress(stats: ActivityStats) -> Dict:
    experience = experience_for(stats)
    level = calculate_level(experience)
    achievements: List[Dict] = [a.evaluate(stats) for a in ACHIEVEMENTS]
    return {
        "level": level,
        "title": level_title(level),
        "experience": experience,
        "next_level_experience": next_level_experience(level),
        "level_progress": level_progress(experience, level),
        "achievements": achievements,
        "stats": {
            "tests_completed": stats.tests_completed,
            "mood_entries_logged": stats.mood_entries_logged,
            "insights_generated": stats.insights_generated,
            "days_active": stats.days_active,
            "longest_mood_streak": stats.longest_mood_streak,
        },
    }
