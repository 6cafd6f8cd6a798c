"""
Customer Orders Service.

REST API for customers and their orders, persisted with SQLAlchemy.
"""

__version__ = "1.0.0"
