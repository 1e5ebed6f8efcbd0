"""
Ephemeral resources, values that are never persisted to Terraform state.
"""

from .mysql_password import MySQLPasswordModel, MySQLPasswordResource, OpenResponse

__all__ = ["MySQLPasswordModel", "MySQLPasswordResource", "OpenResponse"]
