"""Internal constants shared across the library."""

BASE_URL = "http://localhost:3001"
USER_AGENT = "pygameday/1"

# ------------------------------------------------------------------
# HTTP endpoints
# ------------------------------------------------------------------

ATTENDANCE_FORECAST_ENDPOINT = "/predictions/attendance"
CONCESSIONS_FORECAST_ENDPOINT = "/predictions/concessions"
PARKING_FORECAST_ENDPOINT = "/predictions/parking"
HISTORICAL_ENDPOINT = "/analytics/historical"

DEFAULT_HISTORY_WINDOW_DAYS = 30

# ------------------------------------------------------------------
# Realtime event names (one topic per event under the topic prefix)
# ------------------------------------------------------------------

EVENT_ATTENDANCE = "attendance-update"
EVENT_CONCESSIONS = "concessions-update"
EVENT_PARKING = "parking-update"
REALTIME_EVENTS: tuple[str, ...] = (EVENT_ATTENDANCE, EVENT_CONCESSIONS, EVENT_PARKING)

# ------------------------------------------------------------------
# Seed state used when a session starts before any event arrives
# ------------------------------------------------------------------

SEED_ATTENDANCE = 55390
SEED_SALES = 238131.00
SEED_INVENTORY: dict[str, int] = {
    "Hot Dogs": 1500,
    "Beverages": 2500,
    "Snacks": 3000,
}
SEED_PARKING_AVAILABLE = -21234
SEED_PARKING_OCCUPIED = 33234

# ------------------------------------------------------------------
# Attendance tiers, evaluated in order (ratio lower bound, label, color)
# ------------------------------------------------------------------

ATTENDANCE_TIERS: tuple[tuple[float, str, str], ...] = (
    (0.95, "Excellent", "emerald"),
    (0.85, "Good", "violet"),
    (0.75, "Fair", "amber"),
)
BELOW_TARGET = ("Below Target", "rose")

UNAVAILABLE_TEXT = "N/A"
