"""
lintforge test suite
====================

This package contains the tests for lintforge.

Test Modules
------------
- test_models.py: Tests for the pydantic models and enums
- test_reconcile.py: Tests for the configuration deep merge
- test_manifest.py: Tests for package.json access and presence checks
- test_detector.py: Tests for the existing-config locator and sniffers
- test_presets.py: Tests for preset loading and the config materializer
- test_installer.py: Tests for the external process boundary
- test_generator.py: Tests for the configuration pipeline
- test_cli.py: Tests for the command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_reconcile.py

    # Run specific test class
    pytest tests/test_generator.py::TestConfigureProject
"""
