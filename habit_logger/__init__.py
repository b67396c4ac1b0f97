"""
Habit Logger - Source Package

A console habit tracker backed by a local SQLite file.

DESIGN PRINCIPLES:
1. Nothing reaches the store without passing validation
2. Malformed input is an expected value, never a crash
3. Store faults are reported, not fatal
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Habit Logger Team"
