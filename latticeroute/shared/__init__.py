"""Shared infrastructure: exceptions, configuration and utilities."""
