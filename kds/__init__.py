"""
Kitchen Display Service

Menu items, table orders and a realtime kitchen feed.
"""

__version__ = "1.0.0"
