"""
Command line tools for State Monitor.
"""
