"""Adapters connecting the reporting core to data sources and frameworks."""
