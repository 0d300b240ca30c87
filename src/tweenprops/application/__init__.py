"""
Application layer: event dispatch and validation shared by the domain model.
"""
