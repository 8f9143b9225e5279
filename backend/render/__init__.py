"""
Plotly `scattermapbox` payloads built from a map session.
"""
