"""Core route-resolution engine.

Responsibilities:
  - Provide the batch pipeline, trace accumulator, solver chain and aggregator.
  - Must not perform I/O; route catalogs are supplied by callers.
"""
