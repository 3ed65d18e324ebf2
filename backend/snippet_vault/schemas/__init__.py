# Schemas package init
"""
Snippet Vault Backend - API Schemas
====================================

What:  Pydantic models for request bodies and response payloads.
Who:   Imported by route handlers; never by the repository.
"""
