"""HTTP API for playback and editor sessions."""
