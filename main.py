"""Cloud Function Entry Point - Root Module.

This is the root-level entry point for Google Cloud Functions.
It imports from the sig_nusantara package.
"""

from sig_nusantara.main import map_data

__all__ = [
    "map_data",
]
