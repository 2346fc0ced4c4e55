"""LinkedWith constants and thresholds.

All magic numbers live here. No exceptions.
"""

# Tenancy
DEFAULT_TENANT = "default"

# A link always joins exactly this many identities
PARTICIPANT_COUNT = 2

# SLO thresholds (milliseconds)
NEIGHBORHOOD_SLO_MS = 100
TREND_SLO_MS = 1000

# Display placeholders for uninitialized entities
INVALID_IDENTITY_TEXT = "Invalid identity"
INVALID_TIMELINE_TEXT = "Invalid link: unassigned participants"

# Event kinds implied by position in a timeline log
EVENT_ESTABLISHED = "established"
EVENT_TORN_DOWN = "torn_down"
