"""Utility modules for the shopify_api library.

This package contains helpers that sit outside the validation core, such as
reading raw configuration options from TOML documents.
"""
