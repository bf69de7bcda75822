"""Small helpers shared by models, services and templates."""
