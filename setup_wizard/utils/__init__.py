"""
Logging and error handling utilities for the setup wizard.
"""
