"""WorkPlus analytics package.

This package is organized by feature modules (compensation, records,
analytics, dashboards, reports) with a thin Flask controller layer on top of
pure calculation and aggregation services.
"""
