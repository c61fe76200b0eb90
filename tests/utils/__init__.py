"""Test utilities for the flexdto test-suite: shared DTO models and log helpers."""
