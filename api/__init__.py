"""HTTP service for the AI Radar directory."""
