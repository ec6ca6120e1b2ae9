"""
Conductor CLI

Command-line tools for inspecting and calling Conductor apps and
generating controllers.
"""
