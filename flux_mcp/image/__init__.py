"""Image generation adapter package.

Scope:
    Provides the Replicate HTTP client used by tool dispatch.

Non-goals:
    - No polling loop; callers poll through the status tool.
    - No image download or Base64 decoding.
    - No retries or caching.
"""
