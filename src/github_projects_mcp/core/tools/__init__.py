"""
Tool modules for github-projects-mcp.

Every module in this package is imported by core.registry; public
coroutines whose first parameter is `client` are exposed as tools.
"""
