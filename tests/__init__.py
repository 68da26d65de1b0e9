"""
Tests for the bandmap package

Test coverage:
- Spot store ordering, tolerance and aging
- Bandmap data file save and restore
- Filtered views, window selection and rendering
- Cluster line parsing, country file, worked log and multipliers
- Configuration loading
"""
