"""Tool handlers, one module per Google product.

Every handler is ``async def handler(ctx: ToolContext, request) -> dict | str``
and raises on failure; the dispatcher turns exceptions into error envelopes.
"""
