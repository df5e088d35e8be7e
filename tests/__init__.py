"""
Test suite for the Container Event Engine.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_anomaly_service.py -v
"""
