"""Storefront backend."""
