"""
GetQuickResume public-site test suites.

`testsuites` stays importable so the framework, page objects and
`run_tests.py` share one import root:
  - ui_testing: live browser tests and the Playwright framework behind them
  - unit: offline checks of that framework
"""
