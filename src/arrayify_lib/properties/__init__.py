# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Data types describing arrayify jobs, submissions, and task states.
"""
