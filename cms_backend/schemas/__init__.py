"""
Pydantic schemas for request bodies and responses.
JSON keys are camelCase; snake_case is accepted on input.
"""
