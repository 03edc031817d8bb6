"""Presentation layer: public API and pytest integration."""
