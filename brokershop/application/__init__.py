"""Application layer - business logic services.

This layer contains application services that orchestrate domain operations,
plus the search expression language used by filtered listings.
Services are independent of routing and can be tested in isolation.
"""
