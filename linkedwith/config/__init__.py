"""Runtime configuration: feature flags."""
