from importlib.metadata import PackageNotFoundError, version as pkg_version

try:
    __version__ = pkg_version("plantpilot")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

SERVICE_NAME = "plantpilot-api"

__all__ = ["SERVICE_NAME", "__version__"]
