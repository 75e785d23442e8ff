"""Requests and handlers kept in sibling modules of one package."""
