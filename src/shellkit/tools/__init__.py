"""
Tool layer: each module builds the argument vector for one delegate program,
runs it and maps its exit status. No printing happens here.
"""
