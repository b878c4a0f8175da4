"""Spec-Driven Development toolkit: project setup, terminal rendering and self-upgrade."""

__version__ = "0.2.2"