"""StudyPilot planner: schedules, notes and mock sign-in over a local key-value store."""

__version__ = "1.0.0"
