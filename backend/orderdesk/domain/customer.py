"""
Customer Domain Model

Author: TM3
Date: 2025-10-17
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from orderdesk.domain.base import DomainModel


class Customer(DomainModel):
    """
    Customer domain model - a registered customer

    Created once through registration and not modified afterwards.
    Email is unique across all customers.
    """

    id: str = Field(..., description="Customer ID")
    first_name: str = Field(..., alias="firstName", description="First name")
    last_name: str = Field(..., alias="lastName", description="Last name")
    email: str = Field(..., description="Email address (unique)")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Last update timestamp")


class CustomerSummary(DomainModel):
    """Customer fields shown inline in the expanded order listing"""

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
