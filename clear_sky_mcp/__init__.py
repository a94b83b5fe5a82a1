"""
Clear Night Sky MCP tools.

Model Context Protocol tools that turn National Weather Service gridpoint data
into observing-window recommendations.
"""

__version__ = "0.1.0"
