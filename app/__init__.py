"""
FastAPI Application Package

Contains the application factory, ingress middleware and proxy routes.
"""
