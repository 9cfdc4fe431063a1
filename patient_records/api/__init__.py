"""HTTP routes of the development record service."""
