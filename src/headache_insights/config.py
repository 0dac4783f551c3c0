"""Policy thresholds for the insights engine.

Analysis code reads these at call time (``config.NAME``), so they can be
tuned or monkeypatched in tests without touching detection logic.
"""

# Day aggregation
WEEKLY_WINDOW_DAYS = 7
DEFAULT_WINDOW_DAYS = 30

# Time-of-day pattern
TIME_MIN_EPISODES = 5
TIME_MIN_PEAK_COUNT = 3
TIME_HIGH_CONFIDENCE_COUNT = 5
AFTERNOON_START_HOUR = 12
EVENING_START_HOUR = 17

# Trigger co-occurrence pattern
PAIR_MIN_EPISODES = 3
PAIR_MIN_TRIGGERS_PER_EPISODE = 2
PAIR_MIN_MULTI_TRIGGER_EPISODES = 3
PAIR_MIN_COUNT = 2
PAIR_HIGH_CONFIDENCE_COUNT = 3

# Weather pattern
WEATHER_MIN_EPISODES = 5
LOW_PRESSURE_HPA = 1010
WEATHER_MIN_LOW_PRESSURE_EPISODES = 3
WEATHER_HIGH_CONFIDENCE_PCT = 50

# Habit (meal timing) pattern
HABIT_MIN_EPISODES = 3
HABIT_MIN_LOGS = 3
HABIT_MIN_TAGGED_EPISODES = 3
HABIT_HIGH_CONFIDENCE_PCT = 40
SKIPPED_MEAL_TRIGGER = "Skipped meal"

# Trend classifier
TREND_MIN_EPISODES = 10
TREND_DAYS_PER_HALF = 15
TREND_IMPROVING_RATIO = 0.8
TREND_WORSENING_RATIO = 1.2

# Risk predictor
RISK_MIN_EPISODES = 5
RISK_RECENT_DAYS = 7
RISK_PREVIOUS_DAYS = 14
RISK_HIGH_MULTIPLIER = 1.5
RISK_BASE_PROBABILITY = 30
RISK_MEDIUM_PROBABILITY = 50
RISK_HIGH_PROBABILITY = 70
RISK_RECURRING_TRIGGER_COUNT = 2
RISK_RECURRING_TRIGGER_BOOST = 10
RISK_HIGH_INTENSITY = 7
RISK_HIGH_INTENSITY_BOOST = 15
RISK_MAX_PROBABILITY = 95

# Barometric helpers
PRESSURE_LOW_HPA = 1000
PRESSURE_HIGH_HPA = 1020
PRESSURE_STEADY_BAND_HPA = 1.0
SUSPICIOUS_DROP_HPA_PER_HOUR = 2.0
