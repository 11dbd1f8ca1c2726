"""Tests for configuration, logging and timing utilities."""
