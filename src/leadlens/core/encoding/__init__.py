"""Encoders for exported reporting data."""
