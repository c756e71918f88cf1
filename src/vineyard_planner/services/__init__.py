"""
Shared service utilities.

- http.py - requests session with default timeout (used by all datasources)
"""
