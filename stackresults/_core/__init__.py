"""Internal helpers: transport, link models and validators."""
