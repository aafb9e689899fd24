"""
Test suite for bootstrap_curve

Contains:
- tests/unit/          : Unit tests for individual modules and engine scenarios
- tests/factories.py   : Builders for engines wired to in-memory collaborators
"""
