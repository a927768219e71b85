"""
Domain layer for the fleet rental system.
Contains validation, the collection store, search, pricing and the
offline request router, separated from persistence and presentation.
"""
