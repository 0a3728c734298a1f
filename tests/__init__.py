"""
Unit Tests for the Chess Coach Engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_evaluation.py

    # Run with coverage
    pytest tests/ --cov=chess_coach --cov-report=html

    # Run specific test
    pytest tests/test_classifier.py::TestClassify::test_forced_wins_over_everything

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
