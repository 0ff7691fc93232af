"""Tienda — store back-office API.

REST CRUD for products, categories, suppliers, clients and employees,
with role-based access, cached lookups and live per-entity WebSocket
notifications on every write.
"""

__version__ = "0.1.0"
