"""
Test suites package.

Kept importable so UI tests can share page objects
(`testsuites.ui_testing.pages`) and unit tests can share fakes
(`testsuites.unit.fakes`).
"""
