"""
Maintenance Business Layer
Service order line items, cost aggregation, lifecycle and maintenance history.
"""
