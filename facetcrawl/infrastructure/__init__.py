# Infrastructure Package
"""
Implementations of domain interfaces: Playwright browser access and JSON storage.
"""
