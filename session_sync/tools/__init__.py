"""CLI tools for Forge Session Sync."""
