"""
Dashboard Builder

A reusable Django app for composing dashboards out of chart, table, metric
and text components laid out on a canvas.
"""

__version__ = "0.1.0"
