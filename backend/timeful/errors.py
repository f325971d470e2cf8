"""Exception types raised while bootstrapping the server."""


class TimefulError(Exception):
    """Base exception for the Timeful server."""


class StartupError(TimefulError):
    """The server cannot start with the current configuration."""


class LogFileError(StartupError):
    """The append-mode log file could not be opened."""

    def __init__(self, path: str, reason: Exception):
        super().__init__(f"Cannot open log file {path}: {reason}")
        self.path = path


class TemplateLoadError(StartupError):
    """The SPA entry point could not be loaded as a template."""

    def __init__(self, path: str, reason: Exception):
        super().__init__(f"Cannot load entry point template {path}: {reason}")
        self.path = path
