"""
Small helpers for paths and human-readable formatting.
"""
