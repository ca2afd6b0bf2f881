"""
Purchasing Business Layer
Purchase request creation and the receipt flow that feeds stock back into inventory.
"""
