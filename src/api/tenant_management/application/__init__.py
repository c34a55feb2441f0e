"""Application layer for the tenant management context.

Services orchestrate the collaborating services through ports; tasks expose
services as pipeline stages.
"""
