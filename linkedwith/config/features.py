"""Feature flags for LinkedWith.

Flags are read at call time through the module (``features.FLAG``), so a
monkeypatch on this module is enough to flip them in tests.

Deployment sequence:
1. QUERY receipts only (default)
2. MUTATION receipts (every identity and link change is recorded)
"""

# =============================================================================
# Receipts
# =============================================================================

# Emit identity_added / link_event receipts on every registry mutation.
# Off by default: high volume, shadow mode.
FEATURE_MUTATION_RECEIPTS_ENABLED = False

# Emit a graph_query receipt for every neighborhood / trend query
FEATURE_QUERY_RECEIPTS_ENABLED = True

# =============================================================================
# SLO enforcement
# =============================================================================

# Emit graph_slo_violation receipts when a query exceeds its budget
FEATURE_SLO_CHECKS_ENABLED = True
