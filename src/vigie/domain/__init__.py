"""
Domain layer for Vigie.

Pure health check model: identifiers, statuses, registry nodes and
result trees. No I/O, no event loop.
"""
