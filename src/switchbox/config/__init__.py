"""
Switcher options and their loading from configuration files.
"""
