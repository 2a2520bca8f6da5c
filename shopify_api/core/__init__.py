"""Core components for the shopify_api library.

This package contains the configuration validator and the small pieces it
relies on: the raw and validated config records, shared enumerations, the
error types and the log emission helpers.
"""
