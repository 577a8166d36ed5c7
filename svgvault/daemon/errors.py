"""Exceptions raised by the vault services."""


class SvgVaultError(Exception):
    """Base class for svgvault errors."""


class InvalidVaultRoot(SvgVaultError, ValueError):
    """The vault root is missing or is not a directory."""

    def __init__(self, root_dir=None):
        self.root_dir = root_dir
        message = "Invalid rootDir"
        if root_dir:
            message = f"{message}: {root_dir}"
        super().__init__(message)


class InvalidFilters(SvgVaultError, ValueError):
    """Search filters were given as something other than an object."""

    def __init__(self):
        super().__init__("filters must be an object")
