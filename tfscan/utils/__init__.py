"""Configuration and shared constants for tfscan."""
