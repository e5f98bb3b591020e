"""
API package.

``router.py`` exposes the top‑level ``router``; the modules in
``endpoints`` define the individual routes.
"""
