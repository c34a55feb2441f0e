"""Tenant management bounded context.

Activates tenants: provisions their identity-provider realm and client
credentials, bootstraps their access-control vocabulary and marks them
ACTIVE.
"""
