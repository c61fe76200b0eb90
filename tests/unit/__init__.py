"""Unit tests for flexdto components."""
