"""
Tracking engine configuration.

Thresholds used by the anomaly detector and the milestone template used
for journey progress scoring.
"""

# =============================================================================
# ANOMALY THRESHOLDS
# =============================================================================

# A port arrival later than this (vs. metadata.expected_arrival) is late
LATE_ARRIVAL_THRESHOLD_MINUTES = 120

# Consecutive events further apart than this are an unusual gap
UNUSUAL_GAP_HOURS = 24

# Same event type repeated within this window counts as a duplicate
DUPLICATE_WINDOW_HOURS = 1


# =============================================================================
# JOURNEY PROGRESS
# =============================================================================
# Ordered milestones approximating a full port-to-port journey.
# port_arrival appears twice: origin port, then destination port.
# Each position is consumed once, so the destination arrival is reachable.

JOURNEY_MILESTONES = (
    "port_arrival",
    "customs_clearance",
    "port_departure",
    "in_transit",
    "port_arrival",
)

MAX_PROGRESS_PCT = 100


# =============================================================================
# STATUS
# =============================================================================

# Label for an event type with no status mapping
DEFAULT_STATUS = "in_progress"
