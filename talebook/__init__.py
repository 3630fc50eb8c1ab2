"""Talebook: a REST backend for saving, sharing and generating children's tales."""

__version__ = "0.1.0"
