"""Dipstik capability lab: composable vehicle inspection modules."""
