"""Constants for the study/sleep clustering demo."""

STUDY_HOURS_COLUMN = "Average_Weekly_Study_Hours"
SLEEP_HOURS_COLUMN = "Average_Sleep_Hours_Per_Night"

MIN_K = 2
MAX_K = 10
DEFAULT_K = 4

MAX_ITERATIONS = 20
CONVERGENCE_THRESHOLD = 0.001

STEP_INTERVAL_SECONDS = 0.5

# Raw-unit plot domains.
STUDY_HOURS_DOMAIN = (0.0, 40.0)
SLEEP_HOURS_DOMAIN = (0.0, 12.0)
