"""
Core models package: users, audit base class and sequence counters
"""
