"""
Core utilities: shared exceptions and cross-cutting concerns used by the
transaction store, analytics and API server.
"""
