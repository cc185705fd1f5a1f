"""Broker Shop - catalogue and account backend."""
