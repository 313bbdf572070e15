"""Configuration, resource model, condition and hook code, metadata and workspace helpers for generating AWS service controllers."""

__version__ = "0.4.0"