"""Core data model, configuration and pipeline orchestration."""
