"""
Standalone services for the API scheduler.

This package contains the process entry points:
- api_service: Serves the start/stop/logs control plane over HTTP
"""
