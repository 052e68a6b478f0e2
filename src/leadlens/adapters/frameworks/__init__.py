"""Web framework adapters exposing the reporting views."""
