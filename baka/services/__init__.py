"""
Services package for the schedule viewer

Loading, indexing, matching and navigation logic.
"""
from baka.services.cache_service import ScheduleCacheStore
from baka.services.fetch_service import fetch_timetables
from baka.services.fuzzy_match import rank, score
from baka.services.navigation import NavigationMachine
from baka.services.schedule_index import ScheduleIndex, Weekday
from baka.services.schedule_loader import load_schedule

__all__ = [
    'ScheduleCacheStore',
    'fetch_timetables',
    'rank',
    'score',
    'NavigationMachine',
    'ScheduleIndex',
    'Weekday',
    'load_schedule',
]
