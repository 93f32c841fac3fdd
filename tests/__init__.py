"""
Test suite for the task tracker backend.

This package contains:
- unit/: services, repositories, request parsing, tokens and CLI
- integration/: REST API tests through the Flask test client
- security/: tenant isolation, authentication and injection probes
- smoke/: one fast pass over the critical user journey
"""
