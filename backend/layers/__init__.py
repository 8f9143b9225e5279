"""
Layer features and GeoJSON loading.
"""
