"""higlint - Human Interface Guidelines compliance checker for UI descriptions."""

__version__ = "0.1.0"
