"""Comparison kernel: schema model, loader, compatibility rules and passes."""
