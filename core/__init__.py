# =============================================================================
# core/__init__.py
# =============================================================================
# Openverse access and essay aggregation, with no MCP framework.
#
# RULE: nothing in this package imports FastMCP.
# httpx is the only third-party dependency, so everything here can be
# exercised with an httpx.MockTransport and no network.
# =============================================================================
