"""
Orchestration — packages combine installers under one fallback policy.
"""
