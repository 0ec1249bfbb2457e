"""
HTTP API serving network builds to the rendering layer.
"""
