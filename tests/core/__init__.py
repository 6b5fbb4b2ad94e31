"""Tests for the core distance transform functionality."""
