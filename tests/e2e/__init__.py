"""
Browser tests for SpendWise.

This package contains the ordered Playwright journey and demonstrates:
- Page Object Model (POM) pattern
- Locators kept in a YAML file instead of page code
- One logged-in session shared by dependent tests
"""
