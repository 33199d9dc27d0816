"""
Test Suite
==========

Test suite matching the vmd/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: API and command line tests
"""
