"""
Data Access Package

Raw parameterized SQL per entity. Every function returns a dict carrying
``data`` and ``error``; callers check ``error`` before using ``data``.
"""
