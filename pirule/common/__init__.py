"""Common utilities for pirule.

This package provides reusable utilities like logging, config, tracing,
and retry policies for gateway calls.
"""
