"""Project setup stage."""

from catipedia.setup.runner import SetupManager, SetupOptions, SetupReport

__all__ = ["SetupManager", "SetupOptions", "SetupReport"]
