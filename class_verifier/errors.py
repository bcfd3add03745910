"""Fatal error taxonomy for a verification scan."""


class ScanError(Exception):
    """Base class for errors that abort the whole scan."""

    category = "scan"


class FilesystemError(ScanError):
    """A root or one of its subdirectories is missing or unreadable."""

    category = "filesystem"


class LoadInfrastructureError(ScanError):
    """Resolution failed in a way that is neither corruption nor a missing reference."""

    category = "load-infrastructure"
