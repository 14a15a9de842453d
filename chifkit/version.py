"""Engine version numbers."""

_MAJOR = 0
_MINOR = 15
_REVISION = 10
_VERSION_STRING = f"{_MAJOR}.{_MINOR}.{_REVISION}"


def get_major() -> int:
    """Return the major version number."""
    return _MAJOR


def get_minor() -> int:
    """Return the minor version number."""
    return _MINOR


def get_revision() -> int:
    """Return the revision number."""
    return _REVISION


def get_version_string() -> str:
    """Return the version as ``major.minor.revision``."""
    return _VERSION_STRING