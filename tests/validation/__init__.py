"""Validation test suite for generated XML.

These tests parse writer output with a namespace-aware parser to make sure
documents are well-formed and carry the expected namespaces.
"""
