"""User administration API."""
