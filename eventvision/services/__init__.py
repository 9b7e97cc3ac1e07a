"""
Venue analysis and rendering services.
"""
