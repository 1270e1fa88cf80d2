"""llpkgstore - generate and verify llcppg binding packages."""

__version__ = "0.3.0"
