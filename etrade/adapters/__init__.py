"""Infrastructure adapters.

Adapters implement protocols defined in core/protocols/.
Each adapter wraps an external concern (HTTP, body decoding).
"""
