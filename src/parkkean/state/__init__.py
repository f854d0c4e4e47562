"""State layer.

This package owns how a live snapshot is merged into the authoritative
stored lots and how the merged values are written back.
"""
