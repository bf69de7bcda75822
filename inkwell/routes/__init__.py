"""Blueprints for the public site, the dashboard and the JSON API."""
