"""
Core domain models, crypto primitives, contracts and errors.

This module contains the foundational building blocks that are independent
of the coordination service transport.
"""
