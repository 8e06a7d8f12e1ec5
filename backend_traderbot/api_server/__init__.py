"""
API server package: HTTP/REST interface.

Serves the dashboard analytics bundle and the per-wallet transaction and
conversation log; delegates to the transaction store and analytics layers.
"""
