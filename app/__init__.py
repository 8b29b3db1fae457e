"""Storefront REST API service."""
