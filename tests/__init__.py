"""
Test suite for fixed-point decimal arithmetic

Contains:
- tests/unit/          : Unit tests for src.core.numeric modules
"""
