"""
Downloads every track and its artwork from a SoundCloud profile.
"""

__version__ = "1.0.0"
