"""
Test package for flexdto.

- unit/: Unit tests for individual components
- utils/: Shared DTO models and log helpers
"""
