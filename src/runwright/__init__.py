"""
Runwright - concurrent test execution engine.

This package provides tools to:
- Declare test classes, tags and generator-based fixtures
- Filter test cases by include/exclude tags
- Run admitted cases on a bounded worker pool with per-test timeouts
- Report classified outcomes in the terminal, as JSON or as HTML
"""

__version__ = "0.1.0"
__author__ = "Runwright Team"
