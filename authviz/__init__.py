"""
Authorization analysis service.

Role hierarchy analysis with interchangeable local and remote data sources.
"""

__version__ = "0.1.0"
