"""Service layer. Loads event data and runs the domain rules over it.

Every public service method returns a ServiceResult.
"""
