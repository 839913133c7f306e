"""Setup, build and deploy tooling for the Catipedia static site."""

__version__ = "0.1.0"
