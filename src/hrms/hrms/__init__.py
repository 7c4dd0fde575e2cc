"""HRMS package.

Organized by feature modules (geofencing, attendance, leaves, users, ...)
with a thin Flask controller layer over service/repository layers.
"""
