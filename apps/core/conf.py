from django.conf import settings

DEFAULTS = {
    'AWAKE_HOURS_PER_DAY': 16,
    'PACING_TOLERANCE': 0.1,
    'TREND_MARGIN': 0.3,
    'TREND_MIN_POINTS': 4,
    'RECENT_COMPLETED_LIMIT': 10,
    'CHECKIN_HISTORY_LIMIT': 30,
}


def tracker_setting(name):
    """Czyta wartość z settings.LIFE_TRACKER z fallbackiem na DEFAULTS."""
    overrides = getattr(settings, 'LIFE_TRACKER', {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
