"""Core object algebra and the libraries built on it.

This package provides:
1. Algebra — clone, include, create, extend, ancestry, method chaining
2. Variants — the configuration separating Xaos from Proto
3. Library — the public root objects for each variant
"""
