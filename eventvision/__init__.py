"""
Event Vision: venue analysis, floor plans and event renders from uploaded venue media.
"""

__version__ = "1.0.0"
