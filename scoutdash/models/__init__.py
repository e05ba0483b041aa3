"""Data models for ScoutDash."""
