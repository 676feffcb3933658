"""Core dispatch package.

Composition:
    - `errors`: normalized tool error hierarchy.
    - `dispatch`: tool-call validation and routing to the Replicate client.
"""
