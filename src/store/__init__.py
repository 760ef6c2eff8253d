"""Sample storage and persistence layer.

This package keeps grid samples in sorted order, decides grid
completeness, and reads and writes tables in binary and text formats.
"""
