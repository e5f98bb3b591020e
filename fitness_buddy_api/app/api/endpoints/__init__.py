"""
Endpoint subpackage.

``records`` builds the CRUD router for each record kind; ``health``
serves the status check.
"""
