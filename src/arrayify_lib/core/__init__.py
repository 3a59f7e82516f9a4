# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for arrayify.

This module collects the configuration, structured logging, error types,
and small helpers shared by the rest of the arrayify codebase.
"""
