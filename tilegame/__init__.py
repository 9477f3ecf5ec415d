"""
Python implementation of the tile-merging game engine and its headless session.
"""
