"""Clinic application for the Live Plus backend.

This package contains models, serializers, views and route registrations
implementing the tenant scoped API used by the dashboard, the navigation
model builder, and (under ``clinic.client``) the Python client that
drives the dashboard pages against that API.
"""
