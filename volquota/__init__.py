"""Volume quota probe for distributed filesystem servers."""

__version__ = "0.1.0"
