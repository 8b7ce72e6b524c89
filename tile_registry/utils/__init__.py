"""Shared helpers.

- tile_lines: Line codec for the persisted tile-map text format
"""
