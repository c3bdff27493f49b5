"""Upload backends and the sync session."""
