"""
Geometry helpers (bounding boxes, shapely conversions).
"""
