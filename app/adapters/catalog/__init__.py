"""Catalog persistence adapters.

Accounts and cookies are reached through a repository interface so the
in-memory implementation can be replaced by a hosted database later.
"""
