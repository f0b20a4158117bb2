"""
L4 Execution — installers, post-install hooks and the subprocess runner.
"""
