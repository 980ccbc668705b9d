"""Circles service: groups, invitations and per-circle plugins."""
