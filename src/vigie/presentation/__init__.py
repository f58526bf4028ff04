"""
Presentation layer for Vigie.
"""
