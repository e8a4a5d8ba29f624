#!/usr/bin/env python3
"""
Test suite for Volio Smart Match.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Using unittest
    python -m unittest discover tests -v

Database tests use a throwaway SQLite file per test, so no external
database is required.
"""
