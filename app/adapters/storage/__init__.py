"""Key-value storage adapters.

Claim histories live in a small key-value slot per client. The service starts
with an in-memory store and can switch to a JSON file without touching the
limiter or the API layer.
"""
