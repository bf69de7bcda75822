"""Management commands (``flask blog ...``)."""
