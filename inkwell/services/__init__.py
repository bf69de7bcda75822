"""Service layer: business rules between routes and models."""
