"""Presentation layer: rendering interface, application controller and CLI."""
