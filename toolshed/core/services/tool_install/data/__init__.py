"""
L0 Data — constants and the package catalog. Pure data.
"""
