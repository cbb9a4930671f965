"""
powerbid: validation, enrichment and analytics for electricity-market bid records.
"""

__version__ = "0.1.0"
