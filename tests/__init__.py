"""
Test suite for the calculator engine

Contains:
- tests/unit/          : Unit tests for individual modules and the engine facade
"""
