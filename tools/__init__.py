# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP wrappers around core/.  Each tool:
#   1. calls one core/ function
#   2. renders the result as 2-space-indented JSON text
#   3. converts OpenverseError into an {"error": ...} payload
#
# Tool docstrings double as the descriptions an LLM reads to decide which
# tool to call, so they describe every parameter and the return shape.
# =============================================================================
