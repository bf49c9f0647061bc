"""actionlint-mcp: GitHub Actions workflow validation over the Model Context Protocol."""

__version__ = "0.1.0"
