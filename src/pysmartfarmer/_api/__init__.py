"""Endpoint functions for the node's HTTP API."""
