"""
L2 Resolver — pick the release and the asset to install.
"""
