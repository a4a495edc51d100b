"""
Day Diary service package.
"""

__version__ = "0.3.0"
