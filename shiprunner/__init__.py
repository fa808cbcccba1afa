"""shiprunner: build, check and release automation for JavaScript libraries."""

__version__ = "0.3.0"
