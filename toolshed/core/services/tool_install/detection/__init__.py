"""
L3 Detection — facts about the host system.
"""
