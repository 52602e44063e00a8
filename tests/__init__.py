"""
react-starter test suite
========================

No test runs a real git or package manager; see conftest.py for the fake
subprocess and the template tree it clones.

Test Modules
------------
- test_models.py: Project name rules, package managers, features, options
- test_settings.py: TOML settings and environment overrides
- test_resolver.py: Turning flags and prompt answers into options
- test_documents.py: Structured source edits
- test_runner.py: Subprocess invocation and dependency installation
- test_fetcher.py: Cloning, package.json rewrite, clean-up and git init
- test_composers.py: The four feature composers
- test_pipeline.py: End-to-end project creation
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_documents.py

    # Run specific test class
    pytest tests/test_composers.py::TestI18n
"""
