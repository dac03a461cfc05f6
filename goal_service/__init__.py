"""Health Goal Service package.

In-memory CRUD microservice for health goals, mounted at ``/resource``.
"""

__version__ = "1.0.0"
