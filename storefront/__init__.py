"""
Storefront catalog service: in-memory product catalog, CRUD API and live
change propagation to connected viewers.
"""

__version__ = "1.0.0"
