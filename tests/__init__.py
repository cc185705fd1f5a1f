# Broker Shop Test Suite
"""
Test suite for Broker Shop.

Integration tests drive the HTTP API; unit tests cover parsing and
repositories; service tests use mocked repositories.
"""
