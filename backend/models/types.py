"""Shared type definitions for type checking.

Uses NewType for IDs so an OrganizationID is not passed where an EventID
is expected.

Uses TypeAlias for types that are purely structural.
"""

from typing import Literal, NewType, TypeAlias

# ID types using NewType for type safety
EventID = NewType("EventID", str)
OrganizationID = NewType("OrganizationID", str)
ProjectID = NewType("ProjectID", str)
UserID = NewType("UserID", str)

# Structural aliases using TypeAlias
RecurringFrequency: TypeAlias = Literal["daily", "weekly", "monthly"]
EmailAddress: TypeAlias = str
