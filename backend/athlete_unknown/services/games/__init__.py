"""Athlete Unknown game domain.

Pure round logic (matching, tile board, hints, ranks, statistics, history)
plus ``results``, the one module that persists a finished round. HTTP routes
and socket handlers import from here and keep transport concerns out.
"""
