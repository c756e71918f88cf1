"""GDD constants."""

# Base temperature for Vitis vinifera (degrees F)
DEFAULT_BASE_TEMP_F = 50.0
