"""
gistsync - mirrors GitHub gists into Pipedrive activities.
"""

__version__ = "0.1.0"
