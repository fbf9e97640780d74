"""HTTP API for the character sheet manager."""
