"""Static reference data (growth stages, display constants)."""
