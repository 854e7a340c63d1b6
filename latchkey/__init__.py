"""Latchkey - user-account and session service."""
