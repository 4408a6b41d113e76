"""Deployment, verification and permission orchestration core."""
