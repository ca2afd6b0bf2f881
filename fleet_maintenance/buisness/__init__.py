"""
Domain layer for the fleet maintenance back office.
Contains the reconciliation logic between service orders, inventory and
purchasing, separated from data persistence concerns.
"""
