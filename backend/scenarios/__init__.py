"""
Static map configuration: scenario YAML files validated into pydantic models.
"""
