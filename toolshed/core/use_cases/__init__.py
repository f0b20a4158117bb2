"""
Use cases — one module per CLI operation, each returning a result object.
"""
