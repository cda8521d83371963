# marketplace/models.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    category: str
    condition: str
    price: float
    description: Optional[str] = None
    image_url: str = Field(alias="imageUrl")
    created_at: datetime = Field(alias="createdAt")

class ProductForm(BaseModel):
    """Text fields of a listing submission, exactly as the form sent them."""
    title: Optional[str] = None
    category: Optional[str] = None
    condition: Optional[str] = None
    price: Optional[str] = None
    description: Optional[str] = None

class Account(BaseModel):
    username: str
    email: str
    password: str

class RegisterIn(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginIn(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class MessageOut(BaseModel):
    message: str

class ProductCreatedOut(BaseModel):
    message: str
    product: Product

class LoginOut(BaseModel):
    message: str
    username: str
