"""Building blocks every bounded context may import.

Authentication, camelCase API models and observation context live here.
Catalog, dashboard and contact depend on this package but never on each
other.
"""
