"""
Diff Viewer Tests Package
=========================
Test suite for the diff viewer core and its configuration.

Run all tests: python3 -m pytest tests/ -v
Run specific: python3 -m pytest tests/test_differ.py -v
"""
