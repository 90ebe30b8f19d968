"""
Example commands built on gscli.
"""
