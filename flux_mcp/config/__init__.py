"""Process configuration package.

Scope:
    Environment-driven Replicate credential and endpoint settings, loaded once
    at startup into an immutable `ReplicateConfig`.
"""
