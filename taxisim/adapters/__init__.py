"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the dispatch core to:
- Scenario sources (plain text files)
- Driver decisions (seeded random, fixed, scripted)
"""
